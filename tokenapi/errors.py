"""Exception types raised by the Token API client and CLI."""

from __future__ import annotations

from typing import Any


class TokenAPIError(RuntimeError):
    """Base class for every error raised by this package."""

    pass


class AuthError(TokenAPIError):
    pass


class ConfigError(TokenAPIError):
    """Raised when environment configuration cannot be parsed."""

    pass


class APIError(TokenAPIError):
    """Raised when the service answers with an error status or an empty body."""

    def __init__(self, message: str, status_code: int | None = None, detail: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class RetryExhaustedError(TokenAPIError):
    """Raised when every attempt of a single request has failed."""

    def __init__(self, attempts: int, last_error: BaseException | None = None):
        if last_error is not None:
            message = f"Request failed after {attempts} attempt(s), retries exhausted: {last_error}"
        else:
            message = "Request failed after all retry attempts"
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error
