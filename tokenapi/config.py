"""Environment-driven defaults for the client and the CLI.

Recognised variables (also read from a local `.env`):

- ``TOKENAPI_KEY``: bearer token attached to every request
- ``TOKEN_API_BASE_URL``: override for the service base URL
- ``MAX_RETRIES``: default for ``--max-retries``
- ``TIMEOUT_MS``: default for ``--timeout-ms``
"""

from __future__ import annotations

import logging
import os

from tokenapi.errors import ConfigError
from tokenapi.utils.env import load_env_file_if_present

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://token-api.thegraph.com"
BASE_URL_ENV = "TOKEN_API_BASE_URL"

DEFAULT_MAX_RETRIES = 3
DEFAULT_TIMEOUT_MS = 10_000


def _int_from_env(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from e
    if value < 0:
        raise ConfigError(f"{key} must not be negative, got {value}")
    logger.debug(f"Using {key}={value} from environment")
    return value


def resolve_base_url(base_url: str | None = None) -> str:
    """Explicit argument, then $TOKEN_API_BASE_URL, then the production URL."""
    url = base_url or os.getenv(BASE_URL_ENV) or DEFAULT_BASE_URL
    return url.rstrip("/")


def policy_defaults_from_env(dotenv: bool = True) -> tuple[int, int]:
    """Return ``(max_retries, timeout_ms)`` defaults for the CLI flags.

    Raises:
        ConfigError: If either variable is set to a non-integer or negative value
    """
    if dotenv:
        load_env_file_if_present()
    return (
        _int_from_env("MAX_RETRIES", DEFAULT_MAX_RETRIES),
        _int_from_env("TIMEOUT_MS", DEFAULT_TIMEOUT_MS),
    )
