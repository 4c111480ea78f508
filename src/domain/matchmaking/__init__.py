"""Team matchmaking modules."""

from domain.matchmaking.combinations import count_team_combinations, generate_team_combinations
from domain.matchmaking.common import (
    MatchmakingParameters,
    PositionPreference,
    RoleAssignment,
    TeamAssignment,
    TeamPairing,
    format_team_assignment,
)
from domain.matchmaking.config import MatchmakingSystemConfig, load_matchmaking_system_configs
from domain.matchmaking.preferences import (
    PositionStats,
    calculate_position_preference,
    derive_position_stats,
    estimate_position_preferences,
)
from domain.matchmaking.roles import TeamQuality, calculate_team_quality, find_best_roles
from domain.matchmaking.saved import SAVED_MATCHUP_TTL, SavedMatchup
from domain.matchmaking.search import (
    MatchupSearch,
    count_pairings,
    count_teammates,
    pairing_frequency,
    rarity_score,
    teammate_score,
)

__all__ = [
    "MatchmakingParameters",
    "MatchmakingSystemConfig",
    "MatchupSearch",
    "PositionPreference",
    "PositionStats",
    "RoleAssignment",
    "SAVED_MATCHUP_TTL",
    "SavedMatchup",
    "TeamAssignment",
    "TeamPairing",
    "TeamQuality",
    "calculate_position_preference",
    "calculate_team_quality",
    "count_pairings",
    "count_team_combinations",
    "count_teammates",
    "derive_position_stats",
    "estimate_position_preferences",
    "find_best_roles",
    "format_team_assignment",
    "generate_team_combinations",
    "load_matchmaking_system_configs",
    "pairing_frequency",
    "rarity_score",
    "teammate_score",
]
