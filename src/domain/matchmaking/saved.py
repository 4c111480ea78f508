"""Saved matchup records handed to an external expiring store."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import uuid4

from domain.matchmaking.common import TeamAssignment
from domain.protocol import MatchupMode

SAVED_MATCHUP_TTL = timedelta(hours=48)


@dataclass(frozen=True)
class SavedMatchup:
    matchup_id: str
    created_at: datetime
    teams: TeamAssignment
    mode: MatchupMode

    @classmethod
    def create(
        cls,
        teams: TeamAssignment,
        mode: MatchupMode,
        *,
        created_at: datetime,
    ) -> SavedMatchup:
        return cls(
            matchup_id=f"matchup_{uuid4().hex}",
            created_at=created_at,
            teams=teams,
            mode=mode,
        )

    @property
    def confidence(self) -> float:
        return self.teams.confidence

    def expires_at(self, ttl: timedelta = SAVED_MATCHUP_TTL) -> datetime:
        return self.created_at + ttl

    def is_expired(self, now: datetime, ttl: timedelta = SAVED_MATCHUP_TTL) -> bool:
        return now - self.created_at >= ttl

    def title(self) -> str:
        teams = self.teams
        return (
            f"{teams.team1.attacker.name} + {teams.team1.defender.name} vs "
            f"{teams.team2.attacker.name} + {teams.team2.defender.name}"
        )
