"""Light-cycle move selection from weighted grid heuristics."""

from cyclegrid.schema import DIRECTION_ORDER, Coordinates, Direction

__all__ = ["Coordinates", "DIRECTION_ORDER", "Direction"]
