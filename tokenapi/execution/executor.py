"""Retry and auto-pagination around page-numbered Token API calls.

A command hands the executor a ``page_fetch(page)`` callable bound to one
endpoint and its filters. The executor decides which pages to request,
pushes every individual attempt through a :class:`SequentialRequestQueue`
and retries failed attempts according to an :class:`ExecutionPolicy`.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from functools import partial
from typing import Any, TypeVar

from tenacity import (
    RetryCallState,
    RetryError,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from tokenapi.errors import RetryExhaustedError
from tokenapi.execution.queue import SequentialRequestQueue
from tokenapi.models import PagedResult, aggregate_pages

logger = logging.getLogger(__name__)

T = TypeVar("T")

PageFetch = Callable[[int], Mapping[str, Any]]


@dataclass(frozen=True)
class ExecutionPolicy:
    """Retry/delay/pagination settings for one CLI invocation.

    Attributes:
        max_retries: Attempts allowed after the first failure (total = max_retries + 1)
        delay_ms: Pause before each retry and between auto-paginated pages.
            This is not a request deadline; a hung request is not interrupted.
        auto_paginate: Keep requesting pages until a short page comes back
    """

    max_retries: int = 3
    delay_ms: int = 10_000
    auto_paginate: bool = False

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")
        if self.delay_ms < 0:
            raise ValueError(f"delay_ms must be >= 0, got {self.delay_ms}")

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000.0


class PaginationExecutor:
    """Runs page fetches with bounded retry and optional auto-pagination.

    Each executor owns its queue unless one is passed in; share a queue
    between executors to serialize their network attempts with each other.

    Examples:
        >>> policy = ExecutionPolicy(max_retries=2, delay_ms=500, auto_paginate=True)
        >>> with PaginationExecutor(policy) as executor:
        ...     result = executor.execute_with_auto_pagination(
        ...         lambda page: client.evm.tokens.get_transfers(network="mainnet", page=page, limit=100),
        ...         limit=100,
        ...     )
    """

    def __init__(
        self,
        policy: ExecutionPolicy,
        queue: SequentialRequestQueue | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.policy = policy
        self._owns_queue = queue is None
        self.queue = queue if queue is not None else SequentialRequestQueue()
        self._sleep = sleep

    def _wait(self) -> None:
        self._sleep(self.policy.delay_seconds)

    def _attempt(self, call: Callable[[], T], attempt: int) -> Callable[[], T]:
        def task() -> T:
            # Retry delay runs inside the queue slot, right before the call.
            if attempt > 0:
                self._wait()
            return call()

        return task

    def _log_retry(self, retry_state: RetryCallState) -> None:
        total = self.policy.max_retries + 1
        error = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            f"Request failed (attempt {retry_state.attempt_number}/{total}): {error}. "
            f"Retrying in {self.policy.delay_ms}ms..."
        )

    def _retrying(self) -> Retrying:
        return Retrying(
            stop=stop_after_attempt(self.policy.max_retries + 1),
            wait=wait_fixed(self.policy.delay_seconds),
            retry=retry_if_exception_type(Exception),
            before_sleep=self._log_retry,
            sleep=self._sleep,
        )

    def execute_with_retry(self, call: Callable[[], T]) -> T:
        """Run `call` through the queue, retrying up to ``policy.max_retries`` times.

        Args:
            call: Zero-argument callable performing one request

        Returns:
            Whatever the first successful attempt returned

        Raises:
            RetryExhaustedError: If every attempt raised; chained to the last error
        """
        try:
            for attempt in self._retrying():
                with attempt:
                    return self.queue.run(
                        self._attempt(call, attempt.retry_state.attempt_number - 1)
                    )
        except RetryError as e:
            last_error = e.last_attempt.exception()
            raise RetryExhaustedError(e.last_attempt.attempt_number, last_error) from last_error
        # Retrying either returns through the body above or raises.
        raise RetryExhaustedError(0)

    def execute_with_auto_pagination(
        self, page_fetch: PageFetch, limit: int | None = None
    ) -> Mapping[str, Any]:
        """Fetch page 1, or every page when auto-pagination applies.

        Auto-pagination runs only when the policy enables it and `limit` is a
        positive page size. Pages are requested in order until one returns
        fewer than `limit` records or carries no `data` list. Each page gets
        its own retry budget; a page that exhausts it aborts the whole sweep
        and nothing accumulated so far is returned.

        Returns:
            The raw page-1 response, or an aggregated response whose `data`
            holds every record and whose pagination reports page 1 and the
            aggregated count
        """
        if not self.policy.auto_paginate or not limit or limit <= 0:
            return self.execute_with_retry(partial(page_fetch, 1))

        items: list[Any] = []
        last_page: PagedResult | None = None
        current_page = 1

        while True:
            payload = self.execute_with_retry(partial(page_fetch, current_page))
            last_page = PagedResult.from_payload(payload)
            if not last_page.has_items:
                break

            items.extend(last_page.items)
            logger.debug(
                f"Page {current_page}: {len(last_page.items)} records ({len(items)} total)"
            )
            if len(last_page.items) < limit:
                break

            self._wait()
            current_page += 1

        logger.info(f"Auto-pagination fetched {current_page} page(s), {len(items)} records")
        return aggregate_pages(last_page, items)

    def close(self) -> None:
        if self._owns_queue:
            self.queue.close()

    def __enter__(self) -> PaginationExecutor:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
