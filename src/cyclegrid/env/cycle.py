"""Per-agent trail bookkeeping."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Tuple

from cyclegrid.env.cells import FREE
from cyclegrid.schema import DIRECTION_ORDER, Coordinates, Direction, ScoreMap
from cyclegrid.strategy.base import Strategy
from cyclegrid.utils.errors import AgentNotPlacedError, StrategyNotSetError

if TYPE_CHECKING:
    from cyclegrid.env.grid import Grid


class Cycle:
    """A light cycle: current position, the trail it left and its strategy."""

    def __init__(self, grid: "Grid", agent_id: int) -> None:
        self.agent_id = agent_id
        self._grid = grid
        self._path: List[Coordinates] = []
        self._coordinates: Optional[Coordinates] = None
        self._strategy: Optional[Strategy] = None

    @property
    def marker(self) -> int:
        return self.agent_id + 1

    @property
    def coordinates(self) -> Optional[Coordinates]:
        return self._coordinates

    @property
    def path(self) -> Tuple[Coordinates, ...]:
        return tuple(self._path)

    @property
    def is_active(self) -> bool:
        return bool(self._path)

    def touch(self, x: int, y: int) -> None:
        self._coordinates = Coordinates(x=x, y=y)
        self._path.append(self._coordinates)
        self._grid.set(x, y, self.marker)

    def destroy(self) -> None:
        """Free every cell of the trail so it no longer blocks anyone."""

        for cell in self._path:
            self._grid.set(cell.x, cell.y, FREE)
        self._path.clear()

    # ------------------------------------------------------------------
    # Decisions
    # ------------------------------------------------------------------

    def set_strategy(self, strategy: Strategy) -> None:
        self._strategy = strategy

    def has_strategy(self) -> bool:
        return self._strategy is not None

    def choose(self) -> Direction:
        if self._strategy is None:
            raise StrategyNotSetError(f"Cycle {self.agent_id} has no strategy assigned.")
        if self._coordinates is None:
            raise AgentNotPlacedError(f"Cycle {self.agent_id} has never been placed on the grid.")
        scores = self._strategy.calculate(self._coordinates, self._grid)
        return best_direction(scores)

    def describe(self) -> str:
        if self._coordinates is None:
            return f"{self.agent_id}: not placed"
        return f"{self.agent_id}: X - {self._coordinates.x}, Y - {self._coordinates.y}"


def best_direction(scores: ScoreMap) -> Direction:
    """Arg-max over :data:`DIRECTION_ORDER`; the first strictly greatest score wins."""

    best = DIRECTION_ORDER[0]
    best_value = scores.get(best, 0.0)
    for direction in DIRECTION_ORDER[1:]:
        value = scores.get(direction, 0.0)
        if value > best_value:
            best = direction
            best_value = value
    return best
