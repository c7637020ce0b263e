"""Occupancy grid shared by every cycle in a game."""

from __future__ import annotations

from typing import Dict, List, Tuple

from cyclegrid.env.cells import FLOODED, FREE, MAX_AGENT_ID, OUT_OF_RANGE
from cyclegrid.env.cycle import Cycle

__all__ = ["FLOODED", "FREE", "Grid", "MAX_AGENT_ID", "OUT_OF_RANGE"]


class Grid:
    """Mutable ``width`` x ``height`` occupancy map plus the agent registry.

    Cell value ``0`` is free and ``k + 1`` is a trail cell of agent ``k``.
    Reads outside the board return :data:`OUT_OF_RANGE` and writes outside
    the board are ignored, so callers never have to bounds-check.
    """

    def __init__(self, width: int, height: int) -> None:
        if width < 1 or height < 1:
            raise ValueError("Grid dimensions must be positive.")
        self.width = width
        self.height = height
        self._cells: List[List[int]] = [[FREE for _ in range(width)] for _ in range(height)]
        self._agents: Dict[int, Cycle] = {}

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            return OUT_OF_RANGE
        return self._cells[y][x]

    def set(self, x: int, y: int, value: int) -> None:
        if not self.in_bounds(x, y):
            return
        self._cells[y][x] = value

    def is_free(self, x: int, y: int) -> bool:
        return self.get(x, y) == FREE

    # ------------------------------------------------------------------
    # Agent registry
    # ------------------------------------------------------------------

    def get_or_create_agent(self, agent_id: int) -> Cycle:
        agent = self._agents.get(agent_id)
        if agent is None:
            if not 0 <= agent_id <= MAX_AGENT_ID:
                raise ValueError(f"Agent id must be within 0..{MAX_AGENT_ID}, got {agent_id}.")
            agent = Cycle(self, agent_id)
            self._agents[agent_id] = agent
        return agent

    def agents(self) -> List[Cycle]:
        return [self._agents[aid] for aid in sorted(self._agents)]

    # ------------------------------------------------------------------
    # Copies and diagnostics
    # ------------------------------------------------------------------

    def clone(self) -> "Grid":
        """Independent copy of the cells; agent entries are shared for read-only use."""

        board = Grid.__new__(Grid)
        board.width = self.width
        board.height = self.height
        board._cells = [row[:] for row in self._cells]
        board._agents = dict(self._agents)
        return board

    def snapshot(self) -> Tuple[Tuple[int, ...], ...]:
        return tuple(tuple(row) for row in self._cells)

    def occupied_count(self) -> int:
        return sum(1 for row in self._cells for value in row if value != FREE)

    def render_ascii(self) -> str:
        rows: List[str] = []
        for row in self._cells:
            rows.append("".join("." if value == FREE else _marker(value) for value in row))
        return "\n".join(rows)


def _marker(value: int) -> str:
    if value == FLOODED:
        return "~"
    if value <= 10:
        return str(value - 1)
    return "#"
