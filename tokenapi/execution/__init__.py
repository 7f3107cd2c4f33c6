"""Sequential request queue and retry/pagination executor."""

from tokenapi.execution.executor import ExecutionPolicy, PageFetch, PaginationExecutor
from tokenapi.execution.queue import SequentialRequestQueue

__all__ = ["ExecutionPolicy", "PageFetch", "PaginationExecutor", "SequentialRequestQueue"]
