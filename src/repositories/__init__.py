"""Database repository helpers."""

from repositories.matches import fetch_matches, fetch_players, history_metadata
from repositories.saved_matchups import InMemorySavedMatchupStore

__all__ = [
    "InMemorySavedMatchupStore",
    "fetch_matches",
    "fetch_players",
    "history_metadata",
]
