"""Shared protocols and enums for match formats, roles and matchmaking modes."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from domain.matchmaking.saved import SavedMatchup


class MatchFormat(str, Enum):
    """How many players each team fields."""

    ONE_VS_ONE = "1v1"
    TWO_VS_TWO = "2v2"

    @property
    def team_size(self) -> int:
        return 1 if self is MatchFormat.ONE_VS_ONE else 2


class Role(str, Enum):
    """Position a player takes within a two-player team."""

    ATTACKER = "attacker"
    DEFENDER = "defender"

    @property
    def other(self) -> Role:
        return Role.DEFENDER if self is Role.ATTACKER else Role.ATTACKER


class MatchupMode(str, Enum):
    """Objective used when searching for a matchup."""

    BALANCED = "balanced"
    RARE = "rare"


@runtime_checkable
class SavedMatchupStore(Protocol):
    """Key-value store for generated matchups with explicit expiry."""

    def save(self, matchup: SavedMatchup) -> None: ...

    def get(self, matchup_id: str, *, now: datetime) -> SavedMatchup | None: ...

    def list_active(self, *, now: datetime) -> list[SavedMatchup]: ...

    def delete(self, matchup_id: str) -> None: ...

    def evict_expired(self, *, now: datetime) -> int: ...


__all__ = [
    "MatchFormat",
    "MatchupMode",
    "Role",
    "SavedMatchupStore",
]
