"""Shared types for team matchmaking."""

from __future__ import annotations

from dataclasses import dataclass

from domain.common import Player, ValidationError
from domain.protocol import Role


@dataclass(frozen=True)
class MatchmakingParameters:
    balance_weight: float = 0.8
    max_ranking_difference: float = 400.0
    rarity_cap: float = 20.0
    min_pool_size: int = 4
    max_pool_size: int = 7
    neutral_confidence: float = 0.3
    confidence_games: int = 10
    preference_threshold: float = 5.0

    @property
    def happiness_weight(self) -> float:
        return 1.0 - self.balance_weight


@dataclass(frozen=True)
class PositionPreference:
    """Role win-rate profile for one player; win rates are percentages."""

    player_id: str
    attacker_win_rate: float
    defender_win_rate: float
    preferred_role: Role | None
    confidence: float

    def win_rate(self, role: Role) -> float:
        return self.attacker_win_rate if role is Role.ATTACKER else self.defender_win_rate


@dataclass(frozen=True)
class TeamPairing:
    """Two ordered teams of two players, before roles are assigned."""

    team1: tuple[Player, Player]
    team2: tuple[Player, Player]

    def players(self) -> tuple[Player, ...]:
        return self.team1 + self.team2


@dataclass(frozen=True)
class RoleAssignment:
    attacker: Player
    defender: Player

    def players(self) -> tuple[Player, Player]:
        return (self.attacker, self.defender)

    def rating_sum(self) -> int:
        return self.attacker.rating + self.defender.rating


@dataclass(frozen=True)
class TeamAssignment:
    """Matchup suggestion: two teams with roles, their rating gap and a 0-1 confidence."""

    team1: RoleAssignment
    team2: RoleAssignment
    ranking_difference: int
    confidence: float

    def __post_init__(self) -> None:
        player_ids = [player.id for player in self.players()]
        if len(set(player_ids)) != len(player_ids):
            raise ValidationError(f"team assignment lists a player more than once: {player_ids}")

    def players(self) -> tuple[Player, ...]:
        return self.team1.players() + self.team2.players()


def ranking_difference(team1: tuple[Player, ...], team2: tuple[Player, ...]) -> int:
    """Absolute gap between the two teams' rating sums."""
    return abs(sum(player.rating for player in team1) - sum(player.rating for player in team2))


def format_team_assignment(assignment: TeamAssignment) -> str:
    """Render a matchup as a short multi-line summary."""
    return (
        f"Team 1: {assignment.team1.attacker.name} (A) + {assignment.team1.defender.name} (D)\n"
        f"Team 2: {assignment.team2.attacker.name} (A) + {assignment.team2.defender.name} (D)\n"
        f"Ranking difference: {assignment.ranking_difference}, "
        f"Confidence: {round(assignment.confidence * 100)}%"
    )
