"""Fixed-size pool of long-lived worker threads draining one FIFO job queue."""

from __future__ import annotations

import threading
from collections import deque
from typing import Callable, Deque, List, Optional

from cyclegrid.utils.errors import PoolClosedError
from cyclegrid.utils.real_time_logger import get_logger

LOGGER = get_logger()

Job = Callable[[], None]


class WorkerPool:
    """Runs submitted callables on ``size`` worker threads.

    The queue is unbounded and strictly FIFO. Idle workers block on a
    condition variable; :meth:`submit` wakes exactly one of them. After
    :meth:`shutdown` workers finish whatever is still queued and exit.
    """

    def __init__(self, size: int, *, name: str = "cyclegrid-worker") -> None:
        if size < 1:
            raise ValueError("WorkerPool needs at least one worker.")
        self._condition = threading.Condition()
        self._jobs: Deque[Job] = deque()
        self._stopped = False
        self._threads: List[threading.Thread] = []
        for index in range(size):
            thread = threading.Thread(target=self._work, name=f"{name}-{index}", daemon=True)
            self._threads.append(thread)
            thread.start()
        LOGGER.debug("[pool] started %d workers", size)

    @property
    def size(self) -> int:
        return len(self._threads)

    @property
    def closed(self) -> bool:
        return self._stopped

    def pending(self) -> int:
        with self._condition:
            return len(self._jobs)

    def submit(self, job: Job) -> None:
        with self._condition:
            if self._stopped:
                raise PoolClosedError("Cannot submit a job to a pool that has been shut down.")
            self._jobs.append(job)
            self._condition.notify()

    def shutdown(self, *, wait: bool = False, timeout: Optional[float] = None) -> None:
        """Stop accepting jobs and release idle workers; running jobs are not interrupted."""

        with self._condition:
            if not self._stopped:
                self._stopped = True
                LOGGER.debug("[pool] shutdown requested with %d queued jobs", len(self._jobs))
            self._condition.notify_all()
        if wait:
            for thread in self._threads:
                if thread is not threading.current_thread():
                    thread.join(timeout)

    def alive_workers(self) -> int:
        return sum(1 for thread in self._threads if thread.is_alive())

    def __enter__(self) -> "WorkerPool":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown(wait=True)

    # ------------------------------------------------------------------
    # Worker side
    # ------------------------------------------------------------------

    def _next_job(self) -> Optional[Job]:
        with self._condition:
            while not self._jobs and not self._stopped:
                self._condition.wait()
            if not self._jobs:
                return None
            return self._jobs.popleft()

    def _work(self) -> None:
        while True:
            job = self._next_job()
            if job is None:
                return
            try:
                job()
            except Exception:  # keep the worker alive for the next job
                LOGGER.exception("[pool] job raised on %s", threading.current_thread().name)
