"""Strategy protocol shared by heuristics and the weighted aggregator."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from cyclegrid.schema import Coordinates, ScoreMap

if TYPE_CHECKING:
    from cyclegrid.env.grid import Grid


@runtime_checkable
class Strategy(Protocol):
    """Scores each of the four directions for a cycle standing at ``position``.

    Implementations must not mutate ``grid``; they may run on a worker thread
    while other strategies read the same grid.
    """

    def calculate(self, position: Coordinates, grid: "Grid") -> ScoreMap:
        ...
