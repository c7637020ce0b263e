"""Game session: the long-lived grid plus the shared decision engine."""

from __future__ import annotations

from typing import Optional

from cyclegrid.config import EngineConfig, build_strategies
from cyclegrid.env.grid import Grid
from cyclegrid.protocol import TurnInput
from cyclegrid.schema import Coordinates
from cyclegrid.strategy.combined import CombinedStrategy
from cyclegrid.utils.real_time_logger import get_logger

LOGGER = get_logger()


class GameSession:
    """Owns the board for a whole game and answers one move per turn.

    The weighted aggregator and its worker pool are built on the first
    :meth:`decide` and reused for every later decision.
    """

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self.config = config or EngineConfig()
        self.grid = Grid(self.config.width, self.config.height)
        self._strategy: Optional[CombinedStrategy] = None

    @property
    def strategy(self) -> Optional[CombinedStrategy]:
        return self._strategy

    def ingest_turn(
        self,
        agent_id: int,
        previous: Optional[Coordinates],
        current: Optional[Coordinates],
    ) -> None:
        """Apply one player's report; ``None`` for either cell means eliminated."""

        cycle = self.grid.get_or_create_agent(agent_id)
        if previous is None or current is None:
            if cycle.is_active:
                LOGGER.info("[session] cycle %d eliminated; freeing %d cells", agent_id, len(cycle.path))
            cycle.destroy()
            return
        # First sighting after the start cell was left: mark the start too.
        if not cycle.path and previous != current:
            cycle.touch(previous.x, previous.y)
        cycle.touch(current.x, current.y)

    def ingest(self, turn: TurnInput) -> None:
        for agent_id, report in enumerate(turn.reports):
            self.ingest_turn(agent_id, report.start, report.current)

    def decide(self, agent_id: int) -> str:
        cycle = self.grid.get_or_create_agent(agent_id)
        if not cycle.has_strategy():
            cycle.set_strategy(self._combined())
        return cycle.choose().value

    def _combined(self) -> CombinedStrategy:
        if self._strategy is None:
            self._strategy = CombinedStrategy(
                build_strategies(self.config),
                timeout_s=self.config.timeout_s,
                pool_size=self.config.pool_size,
            )
            LOGGER.debug(
                "[session] combined strategy ready: %s",
                ", ".join(f"{name}={weight}" for name, weight in self.config.weights.items()),
            )
        return self._strategy

    def close(self) -> None:
        if self._strategy is not None:
            self._strategy.close()

    def __enter__(self) -> "GameSession":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
