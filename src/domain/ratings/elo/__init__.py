"""Elo rating modules."""

from domain.ratings.elo.calculator import (
    EloParameters,
    EloRatingEngine,
    PlayerRatingEvent,
    calculate_expected_score,
    round_half_away_from_zero,
)
from domain.ratings.elo.config import EloSystemConfig, load_elo_system_configs
from domain.ratings.elo.scoped_calculator import ScopedEloCalculator

__all__ = [
    "EloParameters",
    "EloRatingEngine",
    "EloSystemConfig",
    "PlayerRatingEvent",
    "ScopedEloCalculator",
    "calculate_expected_score",
    "load_elo_system_configs",
    "round_half_away_from_zero",
]
