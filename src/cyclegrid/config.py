"""Engine configuration loaded from ``cyclegrid.yaml``."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from cyclegrid.strategy.base import Strategy
from cyclegrid.strategy.heuristics import (
    DEFAULT_SPACE_DEPTH,
    DistanceStrategy,
    SpaceStrategy,
    WallHugStrategy,
)
from cyclegrid.utils.errors import ConfigError
from cyclegrid.utils.real_time_logger import get_logger

LOGGER = get_logger()

CONFIG_ENV = "CYCLEGRID_CONFIG"

HEURISTIC_NAMES = ("distance", "space", "wall_hug")


def _default_config_locations() -> List[Path]:
    locations = [
        Path(os.environ.get(CONFIG_ENV, "")),
        Path.cwd() / "cyclegrid.yaml",
        Path.home() / ".cyclegrid" / "cyclegrid.yaml",
    ]
    return [p for p in locations if str(p).strip() and str(p) != "."]


def _first_existing(paths: List[Path]) -> Optional[Path]:
    for path in paths:
        try:
            if path.is_file():
                return path
        except OSError:
            continue
    return None


class EngineConfig(BaseModel):
    """Resolved settings for one game session."""

    width: int = Field(30, ge=1, description="Board columns.")
    height: int = Field(20, ge=1, description="Board rows.")
    timeout_ms: int = Field(1750, ge=1, description="Wall-clock budget for one decision.")
    space_depth: int = Field(DEFAULT_SPACE_DEPTH, ge=1, description="Flood-fill depth bound.")
    pool_size: Optional[int] = Field(
        None, ge=1, description="Worker threads; defaults to two per weighted heuristic."
    )
    weights: Dict[str, float] = Field(
        default_factory=lambda: {"distance": 1.0, "space": 2.0, "wall_hug": 2.0},
        description="Heuristic name to positive vote weight.",
    )

    @field_validator("weights")
    @classmethod
    def _check_weights(cls, value: Dict[str, float]) -> Dict[str, float]:
        if not value:
            raise ValueError("at least one heuristic weight is required")
        for name, weight in value.items():
            if name not in HEURISTIC_NAMES:
                raise ValueError(f"unknown heuristic '{name}' (expected one of {', '.join(HEURISTIC_NAMES)})")
            if weight <= 0:
                raise ValueError(f"weight for '{name}' must be positive")
        return value

    @property
    def timeout_s(self) -> float:
        return self.timeout_ms / 1000.0


def load_config(config_path: Optional[Union[str, Path]] = None) -> EngineConfig:
    """Load settings from YAML, falling back to defaults when no file is found.

    An explicit ``config_path`` must exist. Otherwise ``$CYCLEGRID_CONFIG``,
    ``./cyclegrid.yaml`` and ``~/.cyclegrid/cyclegrid.yaml`` are tried in order.
    """

    if config_path is not None:
        config_file: Optional[Path] = Path(config_path)
        if not config_file.is_file():
            raise FileNotFoundError(f"Config file not found: {config_file}")
    else:
        config_file = _first_existing(_default_config_locations())

    if config_file is None:
        LOGGER.debug("[config] no config file found; using defaults")
        return EngineConfig()

    try:
        with config_file.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"{config_file} is not valid YAML: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{config_file} must contain a mapping at the top level.")

    try:
        config = EngineConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"{config_file} failed validation:\n{exc}") from exc

    LOGGER.info("[config] Loaded configuration from %s", config_file)
    return config


def dump_config(config: EngineConfig) -> str:
    return yaml.safe_dump(config.model_dump(mode="json"), sort_keys=True)


def build_strategies(config: EngineConfig) -> List[Tuple[Strategy, float]]:
    """Instantiate the weighted heuristics named in ``config.weights``."""

    factories = {
        "distance": DistanceStrategy,
        "space": lambda: SpaceStrategy(max_depth=config.space_depth),
        "wall_hug": WallHugStrategy,
    }
    return [(factories[name](), weight) for name, weight in config.weights.items()]
