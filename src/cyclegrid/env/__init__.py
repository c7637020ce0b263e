"""Grid model and per-cycle trail bookkeeping."""

from .cycle import Cycle, best_direction
from .grid import FLOODED, FREE, OUT_OF_RANGE, Grid

__all__ = ["Cycle", "FLOODED", "FREE", "Grid", "OUT_OF_RANGE", "best_direction"]
