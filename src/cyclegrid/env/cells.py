"""Reserved cell values of the occupancy grid."""

FREE = 0
# Written on flood-fill clones only; never appears on an authoritative grid.
FLOODED = 254
# Returned for any read outside the board.
OUT_OF_RANGE = 255

MAX_AGENT_ID = FLOODED - 2


def is_occupied(value: int) -> bool:
    return value != FREE
