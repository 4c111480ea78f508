"""Load matchmaking system definitions from TOML files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from domain.config_base import BaseSystemConfig, load_system_configs, parse_system_metadata
from domain.matchmaking.common import MatchmakingParameters

ABSOLUTE_MIN_POOL_SIZE = 4
ABSOLUTE_MAX_POOL_SIZE = 7


@dataclass(frozen=True)
class MatchmakingSystemConfig(BaseSystemConfig):
    """Configuration for one matchmaking profile."""

    parameters: MatchmakingParameters

    def as_config_json(self) -> dict[str, Any]:
        return {
            "balance_weight": self.parameters.balance_weight,
            "max_ranking_difference": self.parameters.max_ranking_difference,
            "rarity_cap": self.parameters.rarity_cap,
            "min_pool_size": self.parameters.min_pool_size,
            "max_pool_size": self.parameters.max_pool_size,
            "neutral_confidence": self.parameters.neutral_confidence,
            "confidence_games": self.parameters.confidence_games,
            "preference_threshold": self.parameters.preference_threshold,
        }


def load_matchmaking_system_configs(config_dir: Path) -> list[MatchmakingSystemConfig]:
    """Load and validate all matchmaking TOML config files in a directory."""
    return load_system_configs(
        config_dir,
        _parse_matchmaking_system_config,
        duplicate_name_label="matchmaking",
    )


def _parse_matchmaking_system_config(
    raw: dict[str, Any], file_path: Path
) -> MatchmakingSystemConfig:
    name, description = parse_system_metadata(raw, file_path)
    matchmaking_raw = raw.get("matchmaking", {})

    parameters = MatchmakingParameters(
        balance_weight=float(matchmaking_raw.get("balance_weight", 0.8)),
        max_ranking_difference=float(matchmaking_raw.get("max_ranking_difference", 400.0)),
        rarity_cap=float(matchmaking_raw.get("rarity_cap", 20.0)),
        min_pool_size=int(matchmaking_raw.get("min_pool_size", ABSOLUTE_MIN_POOL_SIZE)),
        max_pool_size=int(matchmaking_raw.get("max_pool_size", ABSOLUTE_MAX_POOL_SIZE)),
        neutral_confidence=float(matchmaking_raw.get("neutral_confidence", 0.3)),
        confidence_games=int(matchmaking_raw.get("confidence_games", 10)),
        preference_threshold=float(matchmaking_raw.get("preference_threshold", 5.0)),
    )
    _validate_parameters(file_path=file_path, parameters=parameters)

    return MatchmakingSystemConfig(
        name=name,
        description=description,
        file_path=file_path,
        parameters=parameters,
    )


def _validate_parameters(*, file_path: Path, parameters: MatchmakingParameters) -> None:
    if parameters.balance_weight < 0.0 or parameters.balance_weight > 1.0:
        raise ValueError(f"{file_path}: [matchmaking].balance_weight must be between 0 and 1")
    if parameters.max_ranking_difference <= 0.0:
        raise ValueError(f"{file_path}: [matchmaking].max_ranking_difference must be > 0")
    if parameters.rarity_cap <= 0.0:
        raise ValueError(f"{file_path}: [matchmaking].rarity_cap must be > 0")
    if not (
        ABSOLUTE_MIN_POOL_SIZE
        <= parameters.min_pool_size
        <= parameters.max_pool_size
        <= ABSOLUTE_MAX_POOL_SIZE
    ):
        raise ValueError(
            f"{file_path}: [matchmaking] pool sizes must satisfy "
            f"{ABSOLUTE_MIN_POOL_SIZE} <= min_pool_size <= max_pool_size <= {ABSOLUTE_MAX_POOL_SIZE}"
        )
    if parameters.neutral_confidence < 0.0 or parameters.neutral_confidence > 1.0:
        raise ValueError(f"{file_path}: [matchmaking].neutral_confidence must be between 0 and 1")
    if parameters.confidence_games <= 0:
        raise ValueError(f"{file_path}: [matchmaking].confidence_games must be > 0")
    if parameters.preference_threshold < 0.0:
        raise ValueError(f"{file_path}: [matchmaking].preference_threshold must be >= 0")
