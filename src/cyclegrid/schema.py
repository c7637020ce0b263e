"""Shared value types: coordinates, directions and per-direction score maps."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Direction(str, Enum):
    """Movement labels printed verbatim on the move protocol."""

    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"


# Clockwise from UP. Ties in the final arg-max go to the earliest entry.
DIRECTION_ORDER: Tuple[Direction, ...] = (
    Direction.UP,
    Direction.RIGHT,
    Direction.DOWN,
    Direction.LEFT,
)

ScoreMap = Dict[Direction, float]


# ---------------------------------------------------------------------------
# Geometry helpers
# ---------------------------------------------------------------------------


class Coordinates(BaseModel):
    """Immutable absolute cell coordinates."""

    model_config = ConfigDict(frozen=True)

    x: int = Field(description="Column index, 0-based from left.")
    y: int = Field(description="Row index, 0-based from top.")

    def as_tuple(self) -> Tuple[int, int]:
        return self.x, self.y


def empty_scores() -> ScoreMap:
    return {direction: 0.0 for direction in DIRECTION_ORDER}


def normalize_scores(scores: Mapping[Direction, float]) -> ScoreMap:
    """Scale ``scores`` so the values sum to 1; a zero total is returned unchanged."""

    total = sum(scores.values())
    if total == 0:
        return dict(scores)
    return {direction: value / total for direction, value in scores.items()}
