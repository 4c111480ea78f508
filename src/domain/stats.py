"""Win/loss records and streaks derived from match history."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Literal

from domain.common import MatchResult

StreakType = Literal["win", "loss"]


@dataclass(frozen=True)
class PlayerRecord:
    player_id: str
    rating: int
    matches_played: int = 0
    wins: int = 0
    losses: int = 0
    goals_for: int = 0
    goals_against: int = 0

    @property
    def win_rate(self) -> float:
        if self.matches_played == 0:
            return 0.0
        return self.wins / float(self.matches_played)

    def with_match(self, match_result: MatchResult, post_rating: int) -> PlayerRecord:
        won = match_result.player_won(self.player_id)
        if match_result.team_of(self.player_id) == 1:
            scored, conceded = match_result.team1_score, match_result.team2_score
        else:
            scored, conceded = match_result.team2_score, match_result.team1_score
        return replace(
            self,
            rating=post_rating,
            matches_played=self.matches_played + 1,
            wins=self.wins + (1 if won else 0),
            losses=self.losses + (0 if won else 1),
            goals_for=self.goals_for + scored,
            goals_against=self.goals_against + conceded,
        )


@dataclass(frozen=True)
class StreakData:
    current_streak: int
    streak_type: StreakType | None
    best_streak: int
    worst_streak: int


def calculate_streaks(player_id: str, matches: Iterable[MatchResult]) -> StreakData:
    """Streaks for one player from matches ordered newest first.

    ``best_streak`` is the longest run of wins and ``worst_streak`` the longest
    run of losses; matches the player did not play are skipped.
    """
    outcomes = [
        match.player_won(player_id)
        for match in matches
        if match.team_of(player_id) is not None
    ]

    current_streak = 0
    streak_type: StreakType | None = None
    for won in outcomes:
        outcome: StreakType = "win" if won else "loss"
        if streak_type is None:
            streak_type = outcome
            current_streak = 1
        elif outcome == streak_type:
            current_streak += 1
        else:
            break

    best_streak = 0
    worst_streak = 0
    win_run = 0
    loss_run = 0
    for won in outcomes:
        if won:
            win_run += 1
            loss_run = 0
        else:
            loss_run += 1
            win_run = 0
        best_streak = max(best_streak, win_run)
        worst_streak = max(worst_streak, loss_run)

    return StreakData(
        current_streak=current_streak,
        streak_type=streak_type,
        best_streak=best_streak,
        worst_streak=worst_streak,
    )
