"""Thread-based execution runtime."""

from .pool import WorkerPool

__all__ = ["WorkerPool"]
