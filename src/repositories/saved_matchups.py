"""In-process saved-matchup store with explicit expiry."""

from __future__ import annotations

from datetime import datetime, timedelta

from domain.matchmaking.saved import SAVED_MATCHUP_TTL, SavedMatchup


class InMemorySavedMatchupStore:
    """Keeps the most recent matchups, newest first, until they expire.

    Nothing is evicted implicitly on save; reads filter expired entries and
    ``evict_expired`` drops them.
    """

    def __init__(self, *, ttl: timedelta = SAVED_MATCHUP_TTL, max_entries: int = 10) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be greater than 0")
        self.ttl = ttl
        self.max_entries = max_entries
        self._matchups: list[SavedMatchup] = []

    def save(self, matchup: SavedMatchup) -> None:
        remaining = [item for item in self._matchups if item.matchup_id != matchup.matchup_id]
        self._matchups = [matchup, *remaining][: self.max_entries]

    def get(self, matchup_id: str, *, now: datetime) -> SavedMatchup | None:
        for matchup in self._matchups:
            if matchup.matchup_id == matchup_id and not matchup.is_expired(now, self.ttl):
                return matchup
        return None

    def list_active(self, *, now: datetime) -> list[SavedMatchup]:
        return [matchup for matchup in self._matchups if not matchup.is_expired(now, self.ttl)]

    def delete(self, matchup_id: str) -> None:
        self._matchups = [item for item in self._matchups if item.matchup_id != matchup_id]

    def evict_expired(self, *, now: datetime) -> int:
        active = self.list_active(now=now)
        evicted = len(self._matchups) - len(active)
        self._matchups = active
        return evicted
