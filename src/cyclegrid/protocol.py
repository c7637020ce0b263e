"""Per-turn text protocol.

Each turn starts with a header line ``N P`` (player count, own player id)
followed by ``N`` lines ``X0 Y0 X1 Y1``: the cycle's start cell and its
current cell. An eliminated player reports ``-1`` everywhere. The reply is a
single line holding ``UP``, ``DOWN``, ``LEFT`` or ``RIGHT``.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, TextIO

from pydantic import BaseModel, Field, ValidationError, model_validator

from cyclegrid.schema import Coordinates
from cyclegrid.utils.errors import ProtocolError


class PlayerReport(BaseModel):
    """One player's line of a turn."""

    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def eliminated(self) -> bool:
        return min(self.x0, self.y0, self.x1, self.y1) < 0

    @property
    def start(self) -> Optional[Coordinates]:
        return None if self.eliminated else Coordinates(x=self.x0, y=self.y0)

    @property
    def current(self) -> Optional[Coordinates]:
        return None if self.eliminated else Coordinates(x=self.x1, y=self.y1)


class TurnInput(BaseModel):
    player_count: int = Field(ge=1)
    my_id: int = Field(ge=0)
    reports: List[PlayerReport]

    @model_validator(mode="after")
    def _check_counts(self) -> "TurnInput":
        if self.my_id >= self.player_count:
            raise ValueError(f"my_id {self.my_id} is not below player_count {self.player_count}")
        if len(self.reports) != self.player_count:
            raise ValueError(f"expected {self.player_count} reports, got {len(self.reports)}")
        return self


def _ints(line: str, expected: int, what: str) -> List[int]:
    parts = line.split()
    if len(parts) != expected:
        raise ProtocolError(f"{what}: expected {expected} integers, got {line!r}")
    try:
        return [int(part) for part in parts]
    except ValueError as exc:
        raise ProtocolError(f"{what}: non-integer value in {line!r}") from exc


def parse_turn(lines: Iterator[str]) -> Optional[TurnInput]:
    """Consume one turn from ``lines``; ``None`` when input ends before a header."""

    header = next((line for line in lines if line.strip()), None)
    if header is None:
        return None
    player_count, my_id = _ints(header, 2, "turn header")

    reports: List[PlayerReport] = []
    for index in range(max(player_count, 0)):
        line = next(lines, None)
        if line is None:
            raise ProtocolError(f"input ended after {index} of {player_count} player lines")
        x0, y0, x1, y1 = _ints(line, 4, f"player {index}")
        reports.append(PlayerReport(x0=x0, y0=y0, x1=x1, y1=y1))

    try:
        return TurnInput(player_count=player_count, my_id=my_id, reports=reports)
    except ValidationError as exc:
        raise ProtocolError(f"invalid turn: {exc}") from exc


def read_turn(stream: TextIO) -> Optional[TurnInput]:
    return parse_turn(iter(stream.readline, ""))
