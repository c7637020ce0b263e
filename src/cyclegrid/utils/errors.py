"""Exception types raised by the decision engine."""

from __future__ import annotations


class CycleGridError(RuntimeError):
    """Base class for every error raised by cyclegrid."""


class PoolClosedError(CycleGridError):
    """Raised when a job is submitted to a worker pool that has been shut down."""


class StrategyNotSetError(CycleGridError):
    """Raised when an agent is asked to choose a move without an assigned strategy."""


class AgentNotPlacedError(CycleGridError):
    """Raised when an agent is asked to choose a move before it was ever placed on the grid."""


class ProtocolError(CycleGridError):
    """Raised when the per-turn text input cannot be parsed."""


class ConfigError(CycleGridError):
    """Raised when a configuration file exists but its content is invalid."""
