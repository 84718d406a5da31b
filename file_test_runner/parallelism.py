"""Hooks letting an embedder limit how many tests run at the same time."""

import threading
from typing import Protocol


class Parallelism(Protocol):
    """Controls the worker count of parallel runs.

    ``on_test_start`` and ``on_test_end`` are called on the worker thread
    around every executed test. ``on_test_start`` may block to hold the
    worker back; a per-test timeout only starts counting once it returns.
    """

    def max_parallelism(self) -> int: ...

    def on_test_start(self) -> None: ...

    def on_test_end(self) -> None: ...


class BoundedParallelism:
    """Parallelism whose limit can be lowered while tests are running.

    Raising the limit above ``max_parallelism`` has no effect, as no more
    workers than that are started.
    """

    def __init__(self, max_parallelism: int) -> None:
        if max_parallelism < 1:
            raise ValueError(
                f"max_parallelism must be at least 1, got {max_parallelism}"
            )
        self._max = max_parallelism
        self._limit = max_parallelism
        self._running = 0
        self._condition = threading.Condition()

    def max_parallelism(self) -> int:
        return self._max

    def set_parallelism(self, parallelism: int) -> None:
        with self._condition:
            self._limit = max(1, min(parallelism, self._max))
            self._condition.notify_all()

    def on_test_start(self) -> None:
        with self._condition:
            self._condition.wait_for(lambda: self._running < self._limit)
            self._running += 1

    def on_test_end(self) -> None:
        with self._condition:
            self._running -= 1
            self._condition.notify_all()
