"""Tests for balanced and rare matchup search."""

from __future__ import annotations

import random
from datetime import datetime, timedelta

import pytest

from domain.common import MatchResult, Player, ValidationError
from domain.matchmaking.common import MatchmakingParameters, PositionPreference, TeamPairing
from domain.matchmaking.search import (
    MatchupSearch,
    count_pairings,
    count_teammates,
    pairing_frequency,
    rarity_score,
    teammate_score,
)
from domain.protocol import MatchFormat, MatchupMode


def _player(player_id: str, rating: int = 1200) -> Player:
    return Player(id=player_id, name=player_id.upper(), rating=rating)


def _match(
    index: int,
    team1: tuple[str, ...],
    team2: tuple[str, ...],
    *,
    match_format: MatchFormat = MatchFormat.TWO_VS_TWO,
) -> MatchResult:
    return MatchResult(
        match_id=f"m{index}",
        event_time=datetime(2026, 1, 1, 12, 0, 0) + timedelta(hours=index),
        match_format=match_format,
        team1_player_ids=team1,
        team2_player_ids=team2,
        team1_score=10,
        team2_score=6,
        season_id="s1",
    )


def _team_ids(assignment) -> tuple[set[str], set[str]]:
    return (
        {player.id for player in assignment.team1.players()},
        {player.id for player in assignment.team2.players()},
    )


def test_balanced_picks_equal_rating_sums() -> None:
    pool = [_player("a", 1500), _player("b", 1100), _player("c", 1300), _player("d", 1300)]
    assignment = MatchupSearch().find_balanced_matchup(pool)

    assert _team_ids(assignment) == ({"a", "b"}, {"c", "d"})
    assert assignment.team1.attacker.id == "a"
    assert assignment.team1.defender.id == "b"
    assert assignment.ranking_difference == 0
    # Balance 1.0 and neutral happiness 0.5: 0.8 + 0.2 * 0.5.
    assert assignment.confidence == pytest.approx(0.9)


def test_balanced_is_deterministic() -> None:
    pool = [
        _player("a", 1510),
        _player("b", 1120),
        _player("c", 1290),
        _player("d", 1350),
        _player("e", 1205),
        _player("f", 990),
    ]
    first = MatchupSearch(rng=random.Random(1)).find_balanced_matchup(pool)
    second = MatchupSearch(rng=random.Random(99)).find_balanced_matchup(pool)
    assert first == second


@pytest.mark.parametrize("size", [4, 5, 6, 7])
def test_results_use_four_distinct_pool_players(size: int) -> None:
    pool = [_player(f"p{index}", 1000 + 37 * index) for index in range(size)]
    search = MatchupSearch(rng=random.Random(3))
    pool_ids = {player.id for player in pool}

    for mode in MatchupMode:
        assignment = search.find_matchup(pool, mode)
        player_ids = [player.id for player in assignment.players()]
        assert len(set(player_ids)) == 4
        assert set(player_ids) <= pool_ids
        assert 0.0 <= assignment.confidence <= 1.0


def test_balanced_honours_role_preferences() -> None:
    pool = [_player("a"), _player("b"), _player("c"), _player("d")]
    preferences = [
        PositionPreference(
            player_id="a",
            attacker_win_rate=20.0,
            defender_win_rate=80.0,
            preferred_role=None,
            confidence=1.0,
        )
    ]
    assignment = MatchupSearch().find_balanced_matchup(pool, preferences)

    assert assignment.team1.defender.id == "a"


def test_balanced_rejects_invalid_pool() -> None:
    with pytest.raises(ValidationError):
        MatchupSearch().find_balanced_matchup([_player("a"), _player("b"), _player("c")])


def test_rare_prefers_players_who_have_not_met() -> None:
    pool = [_player(player_id) for player_id in ("a", "b", "c", "d", "e")]
    history = [
        _match(0, ("a", "b"), ("x", "y")),
        _match(1, ("a", "b"), ("x", "y")),
        _match(2, ("a", "b"), ("x", "y")),
        _match(3, ("a", "x"), ("b", "y")),
    ]
    assignment = MatchupSearch(rng=random.Random(5)).find_rare_matchup(pool, history)

    assert _team_ids(assignment) == ({"a", "c"}, {"d", "e"})
    assert assignment.confidence == pytest.approx(1.0)
    assert assignment.ranking_difference == 0


def test_rare_splits_frequent_teammates_in_four_player_pool() -> None:
    pool = [_player(player_id) for player_id in ("a", "b", "c", "d")]
    history = [
        _match(0, ("a", "b"), ("x", "y")),
        _match(1, ("a", "b"), ("x", "y")),
        _match(2, ("a", "b"), ("x", "y")),
        _match(3, ("a", "x"), ("b", "y")),
    ]

    for seed in range(5):
        assignment = MatchupSearch(rng=random.Random(seed)).find_rare_matchup(pool, history)
        teams = _team_ids(assignment)
        assert {"a", "b"} not in teams
        assert teams == ({"a", "c"}, {"b", "d"})
        # Every split of four players covers the same six pairs.
        assert assignment.confidence == pytest.approx(1.0 - 4 / 20)


def test_rare_without_history_takes_first_pairing() -> None:
    pool = [_player(player_id) for player_id in ("a", "b", "c", "d")]
    assignment = MatchupSearch(rng=random.Random(0)).find_rare_matchup(pool, [])

    assert _team_ids(assignment) == ({"a", "b"}, {"c", "d"})
    assert assignment.confidence == pytest.approx(1.0)


def test_rare_confidence_drops_with_shared_history() -> None:
    pool = [_player(player_id) for player_id in ("a", "b", "c", "d")]
    history = [_match(index, ("a", "b"), ("c", "d")) for index in range(5)]
    assignment = MatchupSearch(rng=random.Random(0)).find_rare_matchup(pool, history)

    # Every pair met five times: rarity 30 is past the cap of 20.
    assert assignment.confidence == pytest.approx(0.0)

    one_match = MatchupSearch(rng=random.Random(0)).find_rare_matchup(pool, history[:1])
    assert one_match.confidence == pytest.approx(1.0 - 6 / 20)


def test_rare_roles_are_reproducible_with_seed() -> None:
    pool = [_player(player_id) for player_id in ("a", "b", "c", "d", "e", "f")]
    first = MatchupSearch(rng=random.Random(42)).find_rare_matchup(pool, [])
    second = MatchupSearch(rng=random.Random(42)).find_rare_matchup(pool, [])
    assert first == second


def test_rarity_cap_is_configurable() -> None:
    pool = [_player(player_id) for player_id in ("a", "b", "c", "d")]
    history = [_match(0, ("a", "b"), ("c", "d"))]
    search = MatchupSearch(MatchmakingParameters(rarity_cap=12.0), rng=random.Random(0))

    assignment = search.find_matchup(pool, MatchupMode.RARE, matches=history)
    assert assignment.confidence == pytest.approx(0.5)


def test_pairing_counts_include_teammates_and_opponents() -> None:
    history = [
        _match(0, ("a", "b"), ("c", "d")),
        _match(1, ("a",), ("b",), match_format=MatchFormat.ONE_VS_ONE),
    ]
    counts = count_pairings(history)

    assert counts[frozenset(("a", "b"))] == 2
    assert counts[frozenset(("a", "c"))] == 1
    assert counts[frozenset(("c", "d"))] == 1
    assert pairing_frequency("a", "b", history) == 2
    assert pairing_frequency("b", "a", history) == 2
    assert pairing_frequency("a", "e", history) == 0

    pairing = TeamPairing(team1=(_player("a"), _player("b")), team2=(_player("c"), _player("d")))
    assert rarity_score(pairing, counts) == 7


def test_teammate_counts_ignore_opponents() -> None:
    history = [
        _match(0, ("a", "b"), ("c", "d")),
        _match(1, ("a", "c"), ("b", "d")),
        _match(2, ("a",), ("b",), match_format=MatchFormat.ONE_VS_ONE),
    ]
    counts = count_teammates(history)

    assert counts[frozenset(("a", "b"))] == 1
    assert counts[frozenset(("a", "c"))] == 1
    assert counts[frozenset(("b", "d"))] == 1
    assert counts[frozenset(("a", "d"))] == 0

    together = TeamPairing(team1=(_player("b"), _player("d")), team2=(_player("a"), _player("c")))
    apart = TeamPairing(team1=(_player("a"), _player("d")), team2=(_player("b"), _player("c")))
    assert teammate_score(together, counts) == 2
    assert teammate_score(apart, counts) == 0
