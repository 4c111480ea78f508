"""Matchup search over all team pairings: balanced or rare (novel) matchups."""

from __future__ import annotations

import random
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from itertools import combinations

from domain.common import MatchResult, Player
from domain.matchmaking.combinations import generate_team_combinations
from domain.matchmaking.common import (
    MatchmakingParameters,
    PositionPreference,
    RoleAssignment,
    TeamAssignment,
    TeamPairing,
    ranking_difference,
)
from domain.matchmaking.preferences import calculate_position_preference
from domain.matchmaking.roles import find_best_roles
from domain.protocol import MatchupMode

PairKey = frozenset[str]


def _pair_key(first_id: str, second_id: str) -> PairKey:
    return frozenset((first_id, second_id))


def count_pairings(matches: Iterable[MatchResult]) -> Counter[PairKey]:
    """Count, for every pair of players, the matches they both played in.

    Teammates and opponents count alike.
    """
    counts: Counter[PairKey] = Counter()
    for match in matches:
        for first_id, second_id in combinations(sorted(set(match.player_ids())), 2):
            counts[_pair_key(first_id, second_id)] += 1
    return counts


def pairing_frequency(first_id: str, second_id: str, matches: Iterable[MatchResult]) -> int:
    """How many matches placed the two players together, as teammates or opponents."""
    return sum(
        1
        for match in matches
        if first_id in match.player_ids() and second_id in match.player_ids()
    )


def rarity_score(pairing: TeamPairing, pair_counts: Mapping[PairKey, int]) -> int:
    """Sum of pairing frequencies over all six pairs of the four players. Lower is rarer."""
    return sum(
        pair_counts.get(_pair_key(first.id, second.id), 0)
        for first, second in combinations(pairing.players(), 2)
    )


def count_teammates(matches: Iterable[MatchResult]) -> Counter[PairKey]:
    """Count, for every pair of players, the matches they played on the same team."""
    counts: Counter[PairKey] = Counter()
    for match in matches:
        for team_ids in (match.team1_player_ids, match.team2_player_ids):
            for first_id, second_id in combinations(sorted(set(team_ids)), 2):
                counts[_pair_key(first_id, second_id)] += 1
    return counts


def teammate_score(pairing: TeamPairing, teammate_counts: Mapping[PairKey, int]) -> int:
    """Past teammate matches of the two proposed teams. Lower keeps frequent partners apart."""
    return sum(
        teammate_counts.get(_pair_key(first.id, second.id), 0)
        for first, second in (pairing.team1, pairing.team2)
    )


class MatchupSearch:
    """Brute-force search for the best matchup in a 4-7 player pool.

    Balanced mode is deterministic. Rare mode picks the pairing deterministically
    and then draws roles from ``rng``; pass a seeded ``random.Random`` to make it
    reproducible.
    """

    def __init__(
        self,
        params: MatchmakingParameters | None = None,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self.params = params or MatchmakingParameters()
        self.rng = rng if rng is not None else random.Random()

    def find_matchup(
        self,
        players: Sequence[Player],
        mode: MatchupMode,
        *,
        matches: Sequence[MatchResult] = (),
        preferences: Mapping[str, PositionPreference] | Iterable[PositionPreference] | None = None,
    ) -> TeamAssignment:
        if mode is MatchupMode.BALANCED:
            return self.find_balanced_matchup(players, preferences)
        if mode is MatchupMode.RARE:
            return self.find_rare_matchup(players, matches)
        raise ValueError(f"Unsupported matchup mode: {mode!r}")

    def find_balanced_matchup(
        self,
        players: Sequence[Player],
        preferences: Mapping[str, PositionPreference] | Iterable[PositionPreference] | None = None,
    ) -> TeamAssignment:
        """Highest quality score across every pairing and role assignment."""
        pool = tuple(players)
        pairings = generate_team_combinations(pool, self.params)
        preference_index = self._preference_index(pool, preferences)

        results = (find_best_roles(pairing, preference_index, self.params) for pairing in pairings)
        best = next(results)
        for result in results:
            if result.quality.score > best.quality.score:
                best = result

        return TeamAssignment(
            team1=best.team1,
            team2=best.team2,
            ranking_difference=best.quality.ranking_difference,
            confidence=min(1.0, best.quality.score),
        )

    def find_rare_matchup(
        self,
        players: Sequence[Player],
        matches: Iterable[MatchResult],
    ) -> TeamAssignment:
        """Pairing whose players have shared the fewest matches; roles are random.

        Equal rarity is broken by how often the proposed teammates already
        played together, then by generation order.
        """
        pool = tuple(players)
        pairings = generate_team_combinations(pool, self.params)
        history = tuple(matches)
        pair_counts = count_pairings(history)
        teammate_counts = count_teammates(history)

        scored = (
            (
                (rarity_score(pairing, pair_counts), teammate_score(pairing, teammate_counts)),
                pairing,
            )
            for pairing in pairings
        )
        (lowest_score, lowest_teammates), best_pairing = next(scored)
        for (score, teammates), pairing in scored:
            if (score, teammates) < (lowest_score, lowest_teammates):
                lowest_score, lowest_teammates, best_pairing = score, teammates, pairing

        return TeamAssignment(
            team1=self._random_roles(best_pairing.team1),
            team2=self._random_roles(best_pairing.team2),
            ranking_difference=ranking_difference(best_pairing.team1, best_pairing.team2),
            confidence=1.0 - min(lowest_score / self.params.rarity_cap, 1.0),
        )

    def _random_roles(self, team: tuple[Player, Player]) -> RoleAssignment:
        attacker_index = 0 if self.rng.random() < 0.5 else 1
        return RoleAssignment(attacker=team[attacker_index], defender=team[1 - attacker_index])

    def _preference_index(
        self,
        pool: tuple[Player, ...],
        preferences: Mapping[str, PositionPreference] | Iterable[PositionPreference] | None,
    ) -> dict[str, PositionPreference]:
        if preferences is None:
            return {
                player.id: calculate_position_preference(player, params=self.params)
                for player in pool
            }
        if isinstance(preferences, Mapping):
            return dict(preferences)
        return {preference.player_id: preference for preference in preferences}


__all__ = [
    "MatchupSearch",
    "count_pairings",
    "count_teammates",
    "pairing_frequency",
    "rarity_score",
    "teammate_score",
]
