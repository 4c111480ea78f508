"""Pick the attacker/defender assignment that maximizes matchup quality."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from domain.common import Player
from domain.matchmaking.common import (
    MatchmakingParameters,
    PositionPreference,
    RoleAssignment,
    TeamPairing,
    ranking_difference,
)
from domain.protocol import Role

NEUTRAL_HAPPINESS = 0.5


@dataclass(frozen=True)
class TeamQuality:
    score: float
    ranking_difference: int
    ranking_score: float
    position_happiness: float


@dataclass(frozen=True)
class RoleOptimizationResult:
    team1: RoleAssignment
    team2: RoleAssignment
    quality: TeamQuality


def enumerate_role_assignments(
    pairing: TeamPairing,
) -> tuple[tuple[RoleAssignment, RoleAssignment], ...]:
    """All four role assignments, in the order used for first-found tie-breaks."""
    (t1_first, t1_second), (t2_first, t2_second) = pairing.team1, pairing.team2
    return (
        (RoleAssignment(t1_first, t1_second), RoleAssignment(t2_first, t2_second)),
        (RoleAssignment(t1_first, t1_second), RoleAssignment(t2_second, t2_first)),
        (RoleAssignment(t1_second, t1_first), RoleAssignment(t2_first, t2_second)),
        (RoleAssignment(t1_second, t1_first), RoleAssignment(t2_second, t2_first)),
    )


def _position_fit(
    player: Player,
    role: Role,
    preferences: Mapping[str, PositionPreference],
    params: MatchmakingParameters,
) -> tuple[float, float]:
    """Return ``(happiness, confidence)`` for one player in one role."""
    preference = preferences.get(player.id)
    if preference is None:
        return NEUTRAL_HAPPINESS, params.neutral_confidence

    win_rate_diff = preference.win_rate(role) - preference.win_rate(role.other)
    happiness = max(0.0, min(1.0, NEUTRAL_HAPPINESS + win_rate_diff / 100.0))
    return happiness, preference.confidence


def calculate_team_quality(
    team1: RoleAssignment,
    team2: RoleAssignment,
    preferences: Mapping[str, PositionPreference],
    params: MatchmakingParameters = MatchmakingParameters(),
) -> TeamQuality:
    """Score one role assignment.

    ``ranking_score`` is 1 for equal rating sums and 0 once the gap reaches
    ``max_ranking_difference``. Position happiness is the confidence-weighted
    mean of each player's fit in their assigned role. Balance carries
    ``balance_weight`` of the final score; role fit only separates near-equal
    candidates.
    """
    difference = ranking_difference(team1.players(), team2.players())
    ranking_score = 1.0 - min(difference / params.max_ranking_difference, 1.0)

    weighted_happiness = 0.0
    total_confidence = 0.0
    for assignment in (team1, team2):
        for player, role in ((assignment.attacker, Role.ATTACKER), (assignment.defender, Role.DEFENDER)):
            happiness, confidence = _position_fit(player, role, preferences, params)
            weighted_happiness += happiness * confidence
            total_confidence += confidence

    if total_confidence > 0.0:
        position_happiness = weighted_happiness / total_confidence
    else:
        position_happiness = NEUTRAL_HAPPINESS

    score = ranking_score * params.balance_weight + position_happiness * params.happiness_weight
    return TeamQuality(
        score=score,
        ranking_difference=difference,
        ranking_score=ranking_score,
        position_happiness=position_happiness,
    )


def find_best_roles(
    pairing: TeamPairing,
    preferences: Mapping[str, PositionPreference],
    params: MatchmakingParameters = MatchmakingParameters(),
) -> RoleOptimizationResult:
    """Return the highest-scoring role assignment; ties keep the earliest."""
    candidates = [
        RoleOptimizationResult(
            team1=team1,
            team2=team2,
            quality=calculate_team_quality(team1, team2, preferences, params),
        )
        for team1, team2 in enumerate_role_assignments(pairing)
    ]

    best = candidates[0]
    for candidate in candidates[1:]:
        if candidate.quality.score > best.quality.score:
            best = candidate
    return best
