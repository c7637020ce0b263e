"""Utility helpers shared across cyclegrid."""

from .errors import (
    AgentNotPlacedError,
    ConfigError,
    CycleGridError,
    PoolClosedError,
    ProtocolError,
    StrategyNotSetError,
)
from .real_time_logger import get_logger

__all__ = [
    "AgentNotPlacedError",
    "ConfigError",
    "CycleGridError",
    "PoolClosedError",
    "ProtocolError",
    "StrategyNotSetError",
    "get_logger",
]
