"""Player-level Elo logic with asymmetric winner/loser K-factors."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from math import copysign, floor

from domain.common import MatchResult, PlayerRatingSnapshot, ValidationError


@dataclass(frozen=True)
class EloParameters:
    initial_rating: int = 1200
    k_factor_winner: float = 35.0
    k_factor_loser: float = 29.0
    scale_factor: float = 400.0
    min_rating: int = 800
    max_rating: int = 2400


@dataclass(frozen=True)
class PlayerRatingEvent:
    player_id: str
    team: int
    match_id: str
    event_time: datetime
    won: bool
    actual_score: float
    expected_score: float
    opponent_rating: float
    pre_rating: int
    rating_delta: int
    post_rating: int
    k_factor: float

    def as_snapshot(self) -> PlayerRatingSnapshot:
        return PlayerRatingSnapshot(
            player_id=self.player_id,
            pre_match_rating=self.pre_rating,
            post_match_rating=self.post_rating,
        )


def calculate_expected_score(rating: float, opponent_rating: float, scale_factor: float) -> float:
    """Compute the Elo expected score for one side."""
    return 1.0 / (1.0 + 10.0 ** ((opponent_rating - rating) / scale_factor))


def round_half_away_from_zero(value: float) -> int:
    """Round so that a rating change of x.5 moves one more point away from zero."""
    return int(copysign(floor(abs(value) + 0.5), value))


class EloRatingEngine:
    """Stateless match-by-match rating update.

    Winners move by ``k_factor_winner`` and losers by ``k_factor_loser``; with the
    default 35/29 split every match adds a few points to the scope overall.
    """

    def __init__(self, params: EloParameters | None = None) -> None:
        self.params = params or EloParameters()

    def clamp(self, rating: float) -> int:
        return int(max(self.params.min_rating, min(self.params.max_rating, rating)))

    def new_rating(self, rating: int, opponent_rating: float, won: bool) -> tuple[int, float, float]:
        """Return ``(post_rating, expected_score, k_factor)`` for one participant."""
        k_factor = self.params.k_factor_winner if won else self.params.k_factor_loser
        expected = calculate_expected_score(
            rating=rating,
            opponent_rating=opponent_rating,
            scale_factor=self.params.scale_factor,
        )
        actual = 1.0 if won else 0.0
        delta = round_half_away_from_zero(k_factor * (actual - expected))
        return self.clamp(rating + delta), expected, k_factor

    def rate_match(
        self,
        match_result: MatchResult,
        ratings: Mapping[str, int],
    ) -> list[PlayerRatingEvent]:
        """Compute post-match ratings for every participant of one match.

        ``ratings`` must hold each participant's rating in the match's scope.
        Players unseen in the scope are defaulted by the caller, never here.
        """
        self._validate_match(match_result)

        missing = [player_id for player_id in match_result.player_ids() if player_id not in ratings]
        if missing:
            raise ValueError(
                f"match_id={match_result.match_id} is missing pre-match ratings for players {missing}"
            )

        team1_pre = {player_id: int(ratings[player_id]) for player_id in match_result.team1_player_ids}
        team2_pre = {player_id: int(ratings[player_id]) for player_id in match_result.team2_player_ids}

        # 1v1 reduces to the direct opponent's rating.
        team1_avg_pre = sum(team1_pre.values()) / float(len(team1_pre))
        team2_avg_pre = sum(team2_pre.values()) / float(len(team2_pre))

        team1_won = match_result.team1_won()

        events: list[PlayerRatingEvent] = []
        for team, pre_ratings, opponent_rating, won in (
            (1, team1_pre, team2_avg_pre, team1_won),
            (2, team2_pre, team1_avg_pre, not team1_won),
        ):
            for player_id, pre_rating in pre_ratings.items():
                post_rating, expected, k_factor = self.new_rating(pre_rating, opponent_rating, won)
                events.append(
                    PlayerRatingEvent(
                        player_id=player_id,
                        team=team,
                        match_id=match_result.match_id,
                        event_time=match_result.event_time,
                        won=won,
                        actual_score=1.0 if won else 0.0,
                        expected_score=expected,
                        opponent_rating=opponent_rating,
                        pre_rating=pre_rating,
                        rating_delta=post_rating - pre_rating,
                        post_rating=post_rating,
                        k_factor=k_factor,
                    )
                )

        return events

    def _validate_match(self, match_result: MatchResult) -> None:
        team_size = match_result.match_format.team_size
        if (
            len(match_result.team1_player_ids) != team_size
            or len(match_result.team2_player_ids) != team_size
        ):
            raise ValidationError(
                f"match_id={match_result.match_id} is {match_result.match_format.value} but has "
                f"{len(match_result.team1_player_ids)}/{len(match_result.team2_player_ids)} players"
            )

        player_ids = match_result.player_ids()
        if len(set(player_ids)) != len(player_ids):
            raise ValidationError(
                f"match_id={match_result.match_id} lists a player more than once: {list(player_ids)}"
            )

        if match_result.team1_score < 0 or match_result.team2_score < 0:
            raise ValidationError(
                f"match_id={match_result.match_id} has negative scores "
                f"{match_result.team1_score}-{match_result.team2_score}"
            )

        if match_result.team1_score == match_result.team2_score:
            raise ValidationError(
                f"match_id={match_result.match_id} is a draw "
                f"({match_result.team1_score}-{match_result.team2_score}); draws cannot be rated"
            )
