"""Process-local request queue that admits one network attempt at a time."""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SequentialRequestQueue:
    """FIFO queue with a concurrency limit of one.

    Tasks are plain callables. They run on a single worker thread in the
    order they were enqueued; a task starts only after every earlier task
    has returned or raised. A failing task does not affect the ones queued
    behind it.

    Examples:
        >>> with SequentialRequestQueue() as queue:
        ...     queue.run(lambda: 42)
        42
    """

    def __init__(self, name: str = "tokenapi-queue"):
        self._pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix=name)
        self._closed = False

    def enqueue(self, task: Callable[[], T]) -> Future[T]:
        """Schedule `task` and return a future settled with its outcome.

        Raises:
            RuntimeError: If the queue has been closed
        """
        if self._closed:
            raise RuntimeError("Cannot enqueue on a closed SequentialRequestQueue")
        return self._pool.submit(task)

    def run(self, task: Callable[[], T]) -> T:
        """Enqueue `task` and block until it settles, re-raising its exception."""
        return self.enqueue(task).result()

    def close(self) -> None:
        """Stop admitting work and wait for admitted tasks to finish."""
        if self._closed:
            return
        self._closed = True
        self._pool.shutdown(wait=True)
        logger.debug("Request queue closed")

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> SequentialRequestQueue:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
