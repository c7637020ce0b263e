"""Stateless per-direction heuristics over an occupancy grid."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cyclegrid.env.cells import FLOODED, FREE, is_occupied
from cyclegrid.schema import Coordinates, Direction, ScoreMap

if TYPE_CHECKING:
    from cyclegrid.env.grid import Grid

DEFAULT_SPACE_DEPTH = 12


class DistanceStrategy:
    """Length of the free straight run in each direction.

    The ray starts one cell away from ``position`` and stops at the first
    occupied cell or the board edge, so a cycle with a wall directly ahead
    scores 0 for that direction.
    """

    name = "distance"

    def calculate(self, position: Coordinates, grid: "Grid") -> ScoreMap:
        x, y = position.x, position.y
        return {
            Direction.LEFT: float(_line(grid, x, y, -1, 0)),
            Direction.UP: float(_line(grid, x, y, 0, -1)),
            Direction.RIGHT: float(_line(grid, x, y, 1, 0)),
            Direction.DOWN: float(_line(grid, x, y, 0, 1)),
        }


def _line(grid: "Grid", x: int, y: int, dx: int, dy: int) -> int:
    length = 0
    x += dx
    y += dy
    while grid.is_free(x, y):
        x += dx
        y += dy
        length += 1
    return length


class SpaceStrategy:
    """Depth-bounded flood-fill area reachable through each neighbour.

    All four floods share one private clone, in the order LEFT, UP, RIGHT,
    DOWN: a pocket counted through one neighbour is not counted again
    through another.
    """

    name = "space"

    def __init__(self, max_depth: int = DEFAULT_SPACE_DEPTH) -> None:
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1.")
        self.max_depth = max_depth

    def calculate(self, position: Coordinates, grid: "Grid") -> ScoreMap:
        x, y = position.x, position.y
        board = grid.clone()
        depth = self.max_depth
        return {
            Direction.LEFT: float(_space(board, x - 1, y, depth)),
            Direction.UP: float(_space(board, x, y - 1, depth)),
            Direction.RIGHT: float(_space(board, x + 1, y, depth)),
            Direction.DOWN: float(_space(board, x, y + 1, depth)),
        }


def _space(board: "Grid", x: int, y: int, steps: int) -> int:
    # Pending visits are checked when popped, so the fill order matches a
    # recursive +x, -x, +y, -y walk without using the call stack.
    area = 0
    stack = [(x, y, steps)]
    while stack:
        cx, cy, left = stack.pop()
        if left <= 0 or board.get(cx, cy) != FREE:
            continue
        area += 1
        board.set(cx, cy, FLOODED)
        stack.append((cx, cy - 1, left - 1))
        stack.append((cx, cy + 1, left - 1))
        stack.append((cx - 1, cy, left - 1))
        stack.append((cx + 1, cy, left - 1))
    return area


class WallHugStrategy:
    """Prefers moves that keep a trail or wall alongside the cycle.

    Every occupied diagonal neighbour (out-of-range counts as occupied)
    boosts the two directions it borders. A direction boosted from both
    sides leads into a near-enclosed pocket and is reset to the baseline.
    A direction whose destination cell is taken always scores 0.
    """

    name = "wall_hug"

    def calculate(self, position: Coordinates, grid: "Grid") -> ScoreMap:
        x, y = position.x, position.y
        up = right = down = left = 1

        if is_occupied(grid.get(x + 1, y - 1)):
            right += 1
            up += 1
        if is_occupied(grid.get(x + 1, y + 1)):
            right += 1
            down += 1
        if is_occupied(grid.get(x - 1, y + 1)):
            left += 1
            down += 1
        if is_occupied(grid.get(x - 1, y - 1)):
            left += 1
            up += 1

        # dangerous pockets
        up = 1 if up == 3 else up
        right = 1 if right == 3 else right
        down = 1 if down == 3 else down
        left = 1 if left == 3 else left

        if is_occupied(grid.get(x, y - 1)):
            up = 0
        if is_occupied(grid.get(x + 1, y)):
            right = 0
        if is_occupied(grid.get(x, y + 1)):
            down = 0
        if is_occupied(grid.get(x - 1, y)):
            left = 0

        return {
            Direction.UP: float(up),
            Direction.RIGHT: float(right),
            Direction.DOWN: float(down),
            Direction.LEFT: float(left),
        }
