"""Stateful Elo replay that keeps one rating table per rating scope."""

from __future__ import annotations

from domain.common import MatchResult
from domain.ratings.elo.calculator import EloParameters, EloRatingEngine, PlayerRatingEvent
from domain.ratings.scope import RatingScope


class ScopedEloCalculator:
    """Stateful match-by-match Elo calculator across (season, format) scopes."""

    def __init__(self, params: EloParameters | None = None) -> None:
        self.engine = EloRatingEngine(params)
        self.params = self.engine.params
        self._ratings: dict[RatingScope, dict[str, int]] = {}

    def get_rating(self, player_id: str, scope: RatingScope) -> int:
        return self._ratings.get(scope, {}).get(player_id, self.params.initial_rating)

    def scopes(self) -> list[RatingScope]:
        return list(self._ratings)

    def ratings(self, scope: RatingScope) -> dict[str, int]:
        """Return a snapshot of current player ratings in one scope."""
        return dict(self._ratings.get(scope, {}))

    def tracked_entity_count(self) -> int:
        return len({player_id for ratings in self._ratings.values() for player_id in ratings})

    def process_match(self, match_result: MatchResult) -> list[PlayerRatingEvent]:
        scope = RatingScope.for_match(match_result)
        pre_ratings = {
            player_id: self.get_rating(player_id, scope)
            for player_id in match_result.player_ids()
        }
        events = self.engine.rate_match(match_result, pre_ratings)

        scope_ratings = self._ratings.setdefault(scope, {})
        for event in events:
            scope_ratings[event.player_id] = event.post_rating
        return events
