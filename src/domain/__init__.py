"""Matchmaking and rating domain modules."""

from domain.common import MatchResult, Player, PlayerRatingSnapshot, ValidationError
from domain.protocol import MatchFormat, MatchupMode, Role, SavedMatchupStore

__all__ = [
    "MatchFormat",
    "MatchResult",
    "MatchupMode",
    "Player",
    "PlayerRatingSnapshot",
    "Role",
    "SavedMatchupStore",
    "ValidationError",
]
