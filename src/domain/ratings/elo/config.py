"""Load Elo system definitions from TOML files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from domain.config_base import BaseSystemConfig, load_system_configs, parse_system_metadata
from domain.ratings.elo.calculator import EloParameters


@dataclass(frozen=True)
class EloSystemConfig(BaseSystemConfig):
    """Configuration for one Elo rating system."""

    parameters: EloParameters

    def as_config_json(self) -> dict[str, Any]:
        return {
            "initial_rating": self.parameters.initial_rating,
            "k_factor_winner": self.parameters.k_factor_winner,
            "k_factor_loser": self.parameters.k_factor_loser,
            "scale_factor": self.parameters.scale_factor,
            "min_rating": self.parameters.min_rating,
            "max_rating": self.parameters.max_rating,
        }


def load_elo_system_configs(config_dir: Path) -> list[EloSystemConfig]:
    """Load and validate all Elo system TOML config files in a directory."""
    return load_system_configs(
        config_dir,
        _parse_elo_system_config,
        duplicate_name_label="elo",
    )


def _parse_elo_system_config(raw: dict[str, Any], file_path: Path) -> EloSystemConfig:
    name, description = parse_system_metadata(raw, file_path)
    elo_raw = raw.get("elo", {})

    parameters = EloParameters(
        initial_rating=int(elo_raw.get("initial_rating", 1200)),
        k_factor_winner=float(elo_raw.get("k_factor_winner", 35.0)),
        k_factor_loser=float(elo_raw.get("k_factor_loser", 29.0)),
        scale_factor=float(elo_raw.get("scale_factor", 400.0)),
        min_rating=int(elo_raw.get("min_rating", 800)),
        max_rating=int(elo_raw.get("max_rating", 2400)),
    )
    _validate_parameters(file_path=file_path, parameters=parameters)

    return EloSystemConfig(
        name=name,
        description=description,
        file_path=file_path,
        parameters=parameters,
    )


def _validate_parameters(*, file_path: Path, parameters: EloParameters) -> None:
    if parameters.k_factor_winner <= 0.0:
        raise ValueError(f"{file_path}: [elo].k_factor_winner must be > 0")
    if parameters.k_factor_loser <= 0.0:
        raise ValueError(f"{file_path}: [elo].k_factor_loser must be > 0")
    if parameters.scale_factor <= 0.0:
        raise ValueError(f"{file_path}: [elo].scale_factor must be > 0")
    if parameters.min_rating >= parameters.max_rating:
        raise ValueError(f"{file_path}: [elo].min_rating must be < max_rating")
    if not parameters.min_rating <= parameters.initial_rating <= parameters.max_rating:
        raise ValueError(
            f"{file_path}: [elo].initial_rating must be between min_rating and max_rating"
        )
