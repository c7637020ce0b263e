"""Heuristic strategies and the weighted aggregator that combines them."""

from .base import Strategy
from .combined import AggregatorState, CombinedStrategy, DecisionContext, StrategyJob
from .heuristics import DistanceStrategy, SpaceStrategy, WallHugStrategy

__all__ = [
    "AggregatorState",
    "CombinedStrategy",
    "DecisionContext",
    "DistanceStrategy",
    "SpaceStrategy",
    "Strategy",
    "StrategyJob",
    "WallHugStrategy",
]
