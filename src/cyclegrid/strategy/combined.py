"""Weighted fan-out/fan-in of several strategies under a wall-clock budget.

Each :meth:`CombinedStrategy.calculate` call is one decision cycle: every
wrapped strategy becomes a :class:`StrategyJob` on the worker pool, each job
normalises its own scores and reports back, and the caller returns once all
reports arrived or the timeout elapsed, whichever is first. Reports that
arrive after that point belong to a finished cycle and are dropped. Jobs
still queued when their cycle finishes are skipped without running.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import TYPE_CHECKING, List, Mapping, Optional, Sequence, Tuple, Union

from cyclegrid.runtime.pool import WorkerPool
from cyclegrid.schema import DIRECTION_ORDER, Coordinates, ScoreMap, empty_scores, normalize_scores
from cyclegrid.strategy.base import Strategy
from cyclegrid.utils.real_time_logger import get_logger

if TYPE_CHECKING:
    from cyclegrid.env.grid import Grid

LOGGER = get_logger()

DEFAULT_TIMEOUT_S = 1.75

WeightedStrategies = Union[Mapping[Strategy, float], Sequence[Tuple[Strategy, float]]]


class AggregatorState(str, Enum):
    IDLE = "IDLE"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    TIMED_OUT = "TIMED_OUT"


@dataclass(frozen=True)
class DecisionContext:
    """Inputs of one decision cycle, bound to every job submitted for it."""

    position: Coordinates
    grid: "Grid"
    cycle: int


class StrategyJob:
    """Schedulable wrapper around one strategy and its slot in the aggregator."""

    def __init__(self, parent: "CombinedStrategy", index: int, strategy: Strategy) -> None:
        self.parent = parent
        self.index = index
        self.strategy = strategy

    @property
    def label(self) -> str:
        return getattr(self.strategy, "name", type(self.strategy).__name__)

    def run(self, context: DecisionContext) -> None:
        if not self.parent.is_current(context.cycle):
            LOGGER.debug("[combined] skipping %s for finished cycle %d", self.label, context.cycle)
            return
        try:
            raw = self.strategy.calculate(context.position, context.grid)
            scores = normalize_scores(raw)
        except Exception:
            LOGGER.exception("[combined] strategy %s failed; counting it as no contribution", self.label)
            scores = {}
        self.parent.report_result(self, scores, context.cycle)


class CombinedStrategy:
    """Strategy whose scores are the weighted sum of normalised sub-strategy scores.

    At most one :meth:`calculate` may be in flight per instance. The merge is
    a plain sum, so the result does not depend on which worker finishes
    first, only on which ones finish in time.
    """

    name = "combined"

    def __init__(
        self,
        strategies: WeightedStrategies,
        *,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        pool: Optional[WorkerPool] = None,
        pool_size: Optional[int] = None,
    ) -> None:
        items = list(strategies.items()) if isinstance(strategies, Mapping) else list(strategies)
        if not items:
            raise ValueError("CombinedStrategy needs at least one weighted strategy.")
        for strategy, weight in items:
            if not isinstance(strategy, Strategy):
                raise TypeError(f"{type(strategy).__name__} has no calculate(position, grid) method.")
            if weight <= 0:
                raise ValueError(f"Weight for {type(strategy).__name__} must be positive, got {weight}.")
        if timeout_s <= 0:
            raise ValueError("timeout_s must be positive.")

        self.timeout_s = timeout_s
        self._jobs: List[StrategyJob] = [
            StrategyJob(self, index, strategy) for index, (strategy, _) in enumerate(items)
        ]
        self._weights: List[float] = [float(weight) for _, weight in items]

        self._owns_pool = pool is None
        self._pool = pool if pool is not None else WorkerPool(pool_size or 2 * len(self._jobs))

        self._condition = threading.Condition()
        self._pending = 0
        self._contributions = 0
        self._cycle = 0
        self._timed_out = True
        self._result: ScoreMap = empty_scores()
        self._state = AggregatorState.IDLE
        self._last_outcome: Optional[AggregatorState] = None

    @property
    def strategy_count(self) -> int:
        return len(self._jobs)

    @property
    def weights(self) -> Tuple[float, ...]:
        return tuple(self._weights)

    @property
    def state(self) -> AggregatorState:
        return self._state

    @property
    def last_outcome(self) -> Optional[AggregatorState]:
        """COMPLETED or TIMED_OUT for the most recent cycle, ``None`` before the first."""

        return self._last_outcome

    @property
    def last_contributions(self) -> int:
        """How many strategies were merged into the most recent result."""

        return self._contributions

    @property
    def pool(self) -> WorkerPool:
        return self._pool

    # ------------------------------------------------------------------
    # Decision cycle
    # ------------------------------------------------------------------

    def calculate(self, position: Coordinates, grid: "Grid") -> ScoreMap:
        with self._condition:
            self._cycle += 1
            self._pending = len(self._jobs)
            self._contributions = 0
            self._result = empty_scores()
            self._timed_out = False
            self._state = AggregatorState.RUNNING
            context = DecisionContext(position=position, grid=grid, cycle=self._cycle)

        started = time.monotonic()
        for job in self._jobs:
            self._pool.submit(partial(job.run, context))

        with self._condition:
            completed = self._condition.wait_for(lambda: self._pending == 0, self.timeout_s)
            self._timed_out = True
            self._last_outcome = AggregatorState.COMPLETED if completed else AggregatorState.TIMED_OUT
            self._state = AggregatorState.IDLE
            result = dict(self._result)
            contributions = self._contributions

        elapsed_ms = (time.monotonic() - started) * 1000.0
        if completed:
            LOGGER.debug("[combined] cycle %d complete in %.1f ms", context.cycle, elapsed_ms)
        else:
            LOGGER.warning(
                "[combined] cycle %d timed out after %.1f ms with %d/%d strategies",
                context.cycle,
                elapsed_ms,
                contributions,
                len(self._jobs),
            )
        return result

    def is_current(self, cycle: int) -> bool:
        with self._condition:
            return not self._timed_out and cycle == self._cycle

    def report_result(self, job: StrategyJob, scores: Mapping, cycle: int) -> None:
        with self._condition:
            if self._timed_out or cycle != self._cycle:
                LOGGER.debug("[combined] dropping late result from %s (cycle %d)", job.label, cycle)
                return
            weight = self._weights[job.index]
            for direction in DIRECTION_ORDER:
                self._result[direction] += weight * scores.get(direction, 0.0)
            self._contributions += 1
            self._pending -= 1
            if self._pending == 0:
                self._condition.notify_all()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        if self._owns_pool:
            self._pool.shutdown()

    def __enter__(self) -> "CombinedStrategy":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
