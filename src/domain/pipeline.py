"""Chronological rating replay over a match history."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from domain.common import MatchResult
from domain.ratings.elo.calculator import EloParameters, PlayerRatingEvent
from domain.ratings.elo.scoped_calculator import ScopedEloCalculator
from domain.ratings.scope import RatingScope, chronological
from domain.stats import PlayerRecord


@dataclass(frozen=True)
class SnapshotMismatch:
    """Stored snapshot that differs from the replayed one (or is missing)."""

    match_id: str
    player_id: str
    stored_pre_rating: int | None
    stored_post_rating: int | None
    replayed_pre_rating: int
    replayed_post_rating: int


@dataclass(frozen=True)
class ReplaySummary:
    processed_matches: int
    tracked_players: int
    events: tuple[PlayerRatingEvent, ...]
    records: dict[RatingScope, dict[str, PlayerRecord]]
    mismatches: tuple[SnapshotMismatch, ...]

    def standings(self, scope: RatingScope) -> list[PlayerRecord]:
        """Records in one scope ordered by rating, then wins."""
        return sorted(
            self.records.get(scope, {}).values(),
            key=lambda record: (-record.rating, -record.wins, record.player_id),
        )


def replay_ratings(
    matches: Iterable[MatchResult],
    params: EloParameters | None = None,
    *,
    scope: RatingScope | None = None,
    echo: Callable[[str], None] | None = None,
    progress_every: int = 1_000,
) -> ReplaySummary:
    """Recompute every rating snapshot from scratch, oldest match first.

    Stored snapshots are never rewritten; differences from the replay are
    reported as mismatches. ``scope`` restricts the replay to one
    (season, format) pair.
    """
    if progress_every <= 0:
        raise ValueError("progress_every must be greater than 0")

    ordered = chronological(
        match for match in matches if scope is None or scope.contains(match)
    )
    total_matches = len(ordered)

    calculator = ScopedEloCalculator(params)
    events: list[PlayerRatingEvent] = []
    records: dict[RatingScope, dict[str, PlayerRecord]] = {}
    mismatches: list[SnapshotMismatch] = []

    for index, match in enumerate(ordered, start=1):
        match_events = calculator.process_match(match)
        events.extend(match_events)

        scope_records = records.setdefault(RatingScope.for_match(match), {})
        for event in match_events:
            record = scope_records.get(event.player_id) or PlayerRecord(
                player_id=event.player_id,
                rating=event.pre_rating,
            )
            scope_records[event.player_id] = record.with_match(match, event.post_rating)
            mismatch = _compare_snapshot(match, event)
            if mismatch is not None:
                mismatches.append(mismatch)

        if echo is not None and index % progress_every == 0:
            echo(f"processed_matches={index}/{total_matches}")

    summary = ReplaySummary(
        processed_matches=total_matches,
        tracked_players=calculator.tracked_entity_count(),
        events=tuple(events),
        records=records,
        mismatches=tuple(mismatches),
    )
    if echo is not None:
        echo(
            "completed "
            f"processed_matches={summary.processed_matches} "
            f"scopes={len(summary.records)} "
            f"tracked_players={summary.tracked_players} "
            f"snapshot_mismatches={len(summary.mismatches)}"
        )
    return summary


def _compare_snapshot(match: MatchResult, event: PlayerRatingEvent) -> SnapshotMismatch | None:
    stored = match.snapshot_for(event.player_id)
    if (
        stored is not None
        and stored.pre_match_rating == event.pre_rating
        and stored.post_match_rating == event.post_rating
    ):
        return None
    return SnapshotMismatch(
        match_id=match.match_id,
        player_id=event.player_id,
        stored_pre_rating=None if stored is None else stored.pre_match_rating,
        stored_post_rating=None if stored is None else stored.post_match_rating,
        replayed_pre_rating=event.pre_rating,
        replayed_post_rating=event.post_rating,
    )


__all__ = ["ReplaySummary", "SnapshotMismatch", "replay_ratings"]
