"""Shared types for matchmaking and rating calculations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from domain.protocol import MatchFormat


class ValidationError(ValueError):
    """Raised when caller-supplied input violates an engine precondition."""


@dataclass(frozen=True)
class Player:
    """Player snapshot with a rating already resolved to the relevant scope."""

    id: str
    name: str = ""
    rating: int = 1200
    matches_played: int = 0
    wins: int = 0
    losses: int = 0
    avatar: str | None = None
    department: str | None = None


@dataclass(frozen=True)
class PlayerRatingSnapshot:
    """Per-player rating values captured when a match was recorded."""

    player_id: str
    pre_match_rating: int
    post_match_rating: int

    @property
    def rating_change(self) -> int:
        return self.post_match_rating - self.pre_match_rating


@dataclass(frozen=True)
class MatchResult:
    """Canonical match outcome payload used by matchmaking and rating calculators.

    For 2v2 matches slot 0 of each team is the attacker and slot 1 the defender.
    """

    match_id: str
    event_time: datetime
    match_format: MatchFormat
    team1_player_ids: tuple[str, ...]
    team2_player_ids: tuple[str, ...]
    team1_score: int
    team2_score: int
    season_id: str | None = None
    snapshots: tuple[PlayerRatingSnapshot, ...] = ()

    def player_ids(self) -> tuple[str, ...]:
        return self.team1_player_ids + self.team2_player_ids

    def team_of(self, player_id: str) -> int | None:
        if player_id in self.team1_player_ids:
            return 1
        if player_id in self.team2_player_ids:
            return 2
        return None

    def team1_won(self) -> bool:
        return self.team1_score > self.team2_score

    def player_won(self, player_id: str) -> bool:
        team = self.team_of(player_id)
        if team is None:
            raise ValueError(f"player_id={player_id} did not play in match_id={self.match_id}")
        if team == 1:
            return self.team1_score > self.team2_score
        return self.team2_score > self.team1_score

    def snapshot_for(self, player_id: str) -> PlayerRatingSnapshot | None:
        for snapshot in self.snapshots:
            if snapshot.player_id == player_id:
                return snapshot
        return None
