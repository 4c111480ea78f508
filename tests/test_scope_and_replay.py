"""Tests for scope rating resolution and chronological replay."""

from __future__ import annotations

from datetime import datetime, timedelta

from domain.common import MatchResult, PlayerRatingSnapshot
from domain.pipeline import replay_ratings
from domain.protocol import MatchFormat
from domain.ratings.scope import RatingScope, chronological, resolve_scope_ratings

SCOPE = RatingScope(season_id="s1", match_format=MatchFormat.TWO_VS_TWO)


def _match(
    match_id: str,
    *,
    hours: int,
    team1: tuple[str, ...] = ("a", "b"),
    team2: tuple[str, ...] = ("c", "d"),
    team1_won: bool = True,
    season_id: str | None = "s1",
    match_format: MatchFormat = MatchFormat.TWO_VS_TWO,
    snapshots: dict[str, tuple[int, int]] | None = None,
) -> MatchResult:
    return MatchResult(
        match_id=match_id,
        event_time=datetime(2026, 3, 1, 18, 0, 0) + timedelta(hours=hours),
        match_format=match_format,
        team1_player_ids=team1,
        team2_player_ids=team2,
        team1_score=10 if team1_won else 8,
        team2_score=8 if team1_won else 10,
        season_id=season_id,
        snapshots=tuple(
            PlayerRatingSnapshot(player_id=player_id, pre_match_rating=pre, post_match_rating=post)
            for player_id, (pre, post) in (snapshots or {}).items()
        ),
    )


def test_chronological_breaks_ties_by_match_id() -> None:
    matches = [_match("m2", hours=1), _match("m3", hours=0), _match("m1", hours=1)]
    assert [match.match_id for match in chronological(matches)] == ["m3", "m1", "m2"]


def test_resolve_scope_ratings_uses_latest_in_scope_snapshot() -> None:
    matches = [
        _match("m2", hours=2, snapshots={"a": (1218, 1230)}),
        _match("m1", hours=1, snapshots={"a": (1200, 1218), "c": (1200, 1185)}),
        _match("other-season", hours=3, season_id="s2", snapshots={"a": (1200, 1300)}),
        _match(
            "singles",
            hours=4,
            team1=("a",),
            team2=("c",),
            match_format=MatchFormat.ONE_VS_ONE,
            snapshots={"a": (1200, 1100)},
        ),
    ]
    ratings = resolve_scope_ratings(["a", "c", "new"], matches, SCOPE, initial_rating=1200)

    assert ratings == {"a": 1230, "c": 1185, "new": 1200}


def test_replay_reports_snapshot_mismatches_without_rewriting() -> None:
    first = _match(
        "m1",
        hours=0,
        snapshots={"a": (1200, 1218), "b": (1200, 1218), "c": (1200, 1185), "d": (1200, 1185)},
    )
    second = _match(
        "m2",
        hours=1,
        team1_won=False,
        snapshots={"a": (1218, 1202), "b": (1218, 1202), "c": (1185, 1210), "d": (1185, 1204)},
    )

    summary = replay_ratings([second, first], scope=SCOPE)

    assert summary.processed_matches == 2
    assert summary.tracked_players == 4
    assert len(summary.events) == 8
    assert len(summary.mismatches) == 1
    mismatch = summary.mismatches[0]
    assert mismatch.match_id == "m2"
    assert mismatch.player_id == "c"
    assert mismatch.stored_post_rating == 1210
    assert mismatch.replayed_post_rating == 1204
    assert second.snapshot_for("c").post_match_rating == 1210

    standings = summary.standings(SCOPE)
    assert [record.player_id for record in standings] == ["c", "d", "a", "b"]
    assert standings[0].rating == 1204
    assert standings[0].wins == 1
    assert standings[0].losses == 1
    assert standings[0].goals_for == 18
    assert standings[0].goals_against == 18


def test_replay_flags_missing_snapshots() -> None:
    summary = replay_ratings([_match("m1", hours=0)], scope=SCOPE)

    assert len(summary.mismatches) == 4
    assert all(mismatch.stored_post_rating is None for mismatch in summary.mismatches)


def test_replay_scope_filters_other_matches() -> None:
    matches = [
        _match("m1", hours=0),
        _match("m2", hours=1, season_id="s2"),
        _match("m3", hours=2, team1=("a",), team2=("c",), match_format=MatchFormat.ONE_VS_ONE),
    ]

    scoped = replay_ratings(matches, scope=SCOPE)
    assert scoped.processed_matches == 1
    assert list(scoped.records) == [SCOPE]

    everything = replay_ratings(matches)
    assert everything.processed_matches == 3
    assert len(everything.records) == 3


def test_replay_echoes_progress() -> None:
    lines: list[str] = []
    matches = [_match(f"m{index}", hours=index) for index in range(3)]
    replay_ratings(matches, echo=lines.append, progress_every=2)

    assert lines[0] == "processed_matches=2/3"
    assert lines[-1].startswith("completed processed_matches=3")
