"""Rating scopes: ratings are tracked independently per season and match format."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from domain.common import MatchResult
from domain.protocol import MatchFormat


@dataclass(frozen=True)
class RatingScope:
    season_id: str | None
    match_format: MatchFormat

    @classmethod
    def for_match(cls, match_result: MatchResult) -> RatingScope:
        return cls(season_id=match_result.season_id, match_format=match_result.match_format)

    def contains(self, match_result: MatchResult) -> bool:
        return (
            match_result.season_id == self.season_id
            and match_result.match_format == self.match_format
        )

    def label(self) -> str:
        return f"{self.season_id or 'no-season'}/{self.match_format.value}"


def chronological(matches: Iterable[MatchResult]) -> list[MatchResult]:
    """Sort matches oldest first with a deterministic match_id tie-break."""
    return sorted(matches, key=lambda match: (match.event_time, match.match_id))


def resolve_scope_ratings(
    player_ids: Iterable[str],
    matches: Iterable[MatchResult],
    scope: RatingScope,
    *,
    initial_rating: int,
) -> dict[str, int]:
    """Return each player's latest stored rating within ``scope``.

    The post-match snapshot of the most recent in-scope match wins; players
    without any snapshot in the scope start at ``initial_rating``.
    """
    resolved = {player_id: initial_rating for player_id in player_ids}
    for match in chronological(match for match in matches if scope.contains(match)):
        for snapshot in match.snapshots:
            if snapshot.player_id in resolved:
                resolved[snapshot.player_id] = snapshot.post_match_rating
    return resolved


__all__ = ["RatingScope", "chronological", "resolve_scope_ratings"]
