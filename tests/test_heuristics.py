import itertools
import random

import pytest

from cyclegrid.env.cells import FLOODED, FREE
from cyclegrid.env.grid import Grid
from cyclegrid.schema import Coordinates, Direction
from cyclegrid.strategy.heuristics import DistanceStrategy, SpaceStrategy, WallHugStrategy

NEIGHBOURS = [(0, -1), (1, 0), (0, 1), (-1, 0), (1, -1), (1, 1), (-1, 1), (-1, -1)]
ORTHOGONAL = {
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
}


def at(x, y):
    return Coordinates(x=x, y=y)


# ---------------------------------------------------------------------------
# DistanceStrategy
# ---------------------------------------------------------------------------


def test_distance_on_empty_board_counts_cells_up_to_the_edge():
    grid = Grid(30, 20)
    scores = DistanceStrategy().calculate(at(15, 10), grid)
    # x: 0..14 to the left, 16..29 to the right; y: 0..9 above, 11..19 below.
    assert scores == {
        Direction.LEFT: 15.0,
        Direction.RIGHT: 14.0,
        Direction.UP: 10.0,
        Direction.DOWN: 9.0,
    }


def test_distance_stops_at_first_trail_cell():
    grid = Grid(30, 20)
    grid.set(15, 7, 1)
    grid.set(16, 10, 2)
    scores = DistanceStrategy().calculate(at(15, 10), grid)
    assert scores[Direction.UP] == 2.0
    assert scores[Direction.RIGHT] == 0.0
    assert scores[Direction.LEFT] == 15.0


def test_distance_ignores_own_cell():
    grid = Grid(5, 5)
    grid.set(2, 2, 1)
    scores = DistanceStrategy().calculate(at(2, 2), grid)
    assert scores == {Direction.LEFT: 2.0, Direction.RIGHT: 2.0, Direction.UP: 2.0, Direction.DOWN: 2.0}


# ---------------------------------------------------------------------------
# SpaceStrategy
# ---------------------------------------------------------------------------


def test_space_does_not_mutate_input_grid():
    grid = Grid(12, 9)
    for x in range(12):
        grid.set(x, 4, 1)
    grid.set(5, 5, 2)
    before = grid.snapshot()
    SpaceStrategy().calculate(at(5, 5), grid)
    assert grid.snapshot() == before


def test_space_counts_each_half_of_a_split_board():
    grid = Grid(5, 5)
    for y in range(5):
        grid.set(2, y, 1)
    scores = SpaceStrategy(max_depth=50).calculate(at(2, 2), grid)
    assert scores == {Direction.LEFT: 10.0, Direction.UP: 0.0, Direction.RIGHT: 10.0, Direction.DOWN: 0.0}


def test_space_shares_one_clone_across_directions():
    grid = Grid(5, 5)
    grid.set(2, 2, 1)
    scores = SpaceStrategy(max_depth=50).calculate(at(2, 2), grid)
    # LEFT is flooded first and claims the whole open region.
    assert scores == {Direction.LEFT: 24.0, Direction.UP: 0.0, Direction.RIGHT: 0.0, Direction.DOWN: 0.0}


def test_space_depth_bound_caps_corridor():
    grid = Grid(30, 1)
    grid.set(0, 0, 1)
    scores = SpaceStrategy().calculate(at(0, 0), grid)
    assert scores[Direction.RIGHT] == 12.0
    assert scores[Direction.LEFT] == 0.0
    assert scores[Direction.UP] == 0.0
    assert scores[Direction.DOWN] == 0.0

    scores = SpaceStrategy(max_depth=40).calculate(at(0, 0), grid)
    assert scores[Direction.RIGHT] == 29.0


def test_space_handles_depth_beyond_the_recursion_limit():
    grid = Grid(60, 60)
    grid.set(0, 0, 1)
    scores = SpaceStrategy(max_depth=5000).calculate(at(0, 0), grid)
    assert scores == {Direction.LEFT: 0.0, Direction.UP: 0.0, Direction.RIGHT: 3599.0, Direction.DOWN: 0.0}

    scores = SpaceStrategy(max_depth=3000).calculate(at(0, 0), grid)
    assert 3000.0 <= scores[Direction.RIGHT] <= 3599.0
    assert scores[Direction.RIGHT] + scores[Direction.DOWN] <= 3599.0


def _reference_space(board, x, y, steps):
    if steps <= 0 or not board.in_bounds(x, y) or board.get(x, y) != FREE:
        return 0
    board.set(x, y, FLOODED)
    return (
        1
        + _reference_space(board, x + 1, y, steps - 1)
        + _reference_space(board, x - 1, y, steps - 1)
        + _reference_space(board, x, y + 1, steps - 1)
        + _reference_space(board, x, y - 1, steps - 1)
    )


@pytest.mark.parametrize("seed", range(12))
@pytest.mark.parametrize("depth", [1, 3, 6, 12, 40])
def test_space_matches_recursive_fill_order(seed, depth):
    rng = random.Random(seed)
    grid = Grid(9, 7)
    for y in range(7):
        for x in range(9):
            if rng.random() < 0.3:
                grid.set(x, y, 1)
    x, y = rng.randrange(9), rng.randrange(7)

    board = grid.clone()
    expected = {
        Direction.LEFT: float(_reference_space(board, x - 1, y, depth)),
        Direction.UP: float(_reference_space(board, x, y - 1, depth)),
        Direction.RIGHT: float(_reference_space(board, x + 1, y, depth)),
        Direction.DOWN: float(_reference_space(board, x, y + 1, depth)),
    }
    assert SpaceStrategy(max_depth=depth).calculate(at(x, y), grid) == expected


def test_space_rejects_non_positive_depth():
    with pytest.raises(ValueError):
        SpaceStrategy(max_depth=0)


# ---------------------------------------------------------------------------
# WallHugStrategy
# ---------------------------------------------------------------------------


def test_wall_hug_open_board_is_flat():
    grid = Grid(9, 9)
    scores = WallHugStrategy().calculate(at(4, 4), grid)
    assert scores == {Direction.UP: 1.0, Direction.RIGHT: 1.0, Direction.DOWN: 1.0, Direction.LEFT: 1.0}


def test_wall_hug_single_diagonal_boosts_both_sides():
    grid = Grid(9, 9)
    grid.set(5, 3, 1)  # top right
    scores = WallHugStrategy().calculate(at(4, 4), grid)
    assert scores == {Direction.UP: 2.0, Direction.RIGHT: 2.0, Direction.DOWN: 1.0, Direction.LEFT: 1.0}


def test_wall_hug_double_boost_resets_to_baseline():
    grid = Grid(9, 9)
    grid.set(5, 3, 1)  # top right
    grid.set(3, 3, 1)  # top left
    scores = WallHugStrategy().calculate(at(4, 4), grid)
    assert scores == {Direction.UP: 1.0, Direction.RIGHT: 2.0, Direction.DOWN: 1.0, Direction.LEFT: 2.0}


def test_wall_hug_treats_board_edge_as_wall():
    grid = Grid(9, 9)
    scores = WallHugStrategy().calculate(at(0, 0), grid)
    assert scores == {Direction.UP: 0.0, Direction.RIGHT: 2.0, Direction.DOWN: 2.0, Direction.LEFT: 0.0}


@pytest.mark.parametrize("mask", range(256))
def test_wall_hug_zeroes_every_blocked_destination(mask):
    grid = Grid(5, 5)
    occupied = {NEIGHBOURS[i] for i in range(8) if mask & (1 << i)}
    for dx, dy in occupied:
        grid.set(2 + dx, 2 + dy, 1)

    scores = WallHugStrategy().calculate(at(2, 2), grid)

    for direction, delta in ORTHOGONAL.items():
        if delta in occupied:
            assert scores[direction] == 0.0
        else:
            assert scores[direction] in (1.0, 2.0)


def test_heuristics_cover_exactly_four_directions():
    grid = Grid(6, 6)
    for strategy in (DistanceStrategy(), SpaceStrategy(), WallHugStrategy()):
        assert set(strategy.calculate(at(3, 3), grid)) == set(Direction)


def test_heuristics_are_repeatable():
    grid = Grid(10, 10)
    for x, y in itertools.product(range(3, 7), (2,)):
        grid.set(x, y, 1)
    for strategy in (DistanceStrategy(), SpaceStrategy(), WallHugStrategy()):
        first = strategy.calculate(at(4, 4), grid)
        assert strategy.calculate(at(4, 4), grid) == first
