"""Enumerate every split of a player pool into two teams of two."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from itertools import combinations
from math import comb

from domain.common import Player, ValidationError
from domain.matchmaking.common import MatchmakingParameters, TeamPairing


def validate_pool(players: Sequence[Player], params: MatchmakingParameters) -> None:
    if len(players) < params.min_pool_size or len(players) > params.max_pool_size:
        raise ValidationError(
            f"Player pool must contain {params.min_pool_size}-{params.max_pool_size} players, "
            f"got {len(players)}"
        )
    player_ids = [player.id for player in players]
    if len(set(player_ids)) != len(player_ids):
        raise ValidationError(f"Player pool lists a player more than once: {player_ids}")


def count_team_combinations(pool_size: int) -> int:
    """Number of ordered pairings produced for a pool: C(N,2) * C(N-2,2)."""
    return comb(pool_size, 2) * comb(pool_size - 2, 2)


def generate_team_combinations(
    players: Sequence[Player],
    params: MatchmakingParameters = MatchmakingParameters(),
) -> Iterator[TeamPairing]:
    """Lazily yield every (team1, team2) pairing from the pool.

    Team order is kept: ``{A,B} vs {C,D}`` and ``{C,D} vs {A,B}`` are both
    yielded. The pool is validated eagerly so errors surface at call time.
    """
    pool = tuple(players)
    validate_pool(pool, params)
    return _iter_team_combinations(pool)


def _iter_team_combinations(pool: tuple[Player, ...]) -> Iterator[TeamPairing]:
    for i, j in combinations(range(len(pool)), 2):
        remaining = [pool[index] for index in range(len(pool)) if index not in (i, j)]
        for first, second in combinations(remaining, 2):
            yield TeamPairing(team1=(pool[i], pool[j]), team2=(first, second))
