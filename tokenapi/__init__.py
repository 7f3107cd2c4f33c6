"""Client library and CLI for the Token API.

This package provides:
- `TokenAPIClient` with VM-namespaced endpoint helpers (evm / svm / tvm)
- A retry and auto-pagination executor that serializes every request
- The `tokenapi` command line tool built on both
"""

__version__ = "0.2.0"

from tokenapi.client import TokenAPIClient, TokenClient
from tokenapi.config import DEFAULT_BASE_URL
from tokenapi.errors import APIError, AuthError, ConfigError, RetryExhaustedError, TokenAPIError
from tokenapi.execution import ExecutionPolicy, PaginationExecutor, SequentialRequestQueue
from tokenapi.networks import EVMChains, SVMChains, TVMChains

__all__ = [
    "DEFAULT_BASE_URL",
    "APIError",
    "AuthError",
    "ConfigError",
    "EVMChains",
    "ExecutionPolicy",
    "PaginationExecutor",
    "RetryExhaustedError",
    "SVMChains",
    "SequentialRequestQueue",
    "TVMChains",
    "TokenAPIClient",
    "TokenAPIError",
    "TokenClient",
]
