from __future__ import annotations

import os

from tokenapi.errors import AuthError
from tokenapi.utils.env import load_env_file_if_present

API_TOKEN_ENV = "TOKENAPI_KEY"


def load_api_token(
    env_key: str = API_TOKEN_ENV, dotenv: bool = True, required: bool = False
) -> str | None:
    """Return the Token API bearer token from environment or .env.

    The public endpoints answer without a token, so a missing token only
    raises AuthError when `required` is set.
    """
    if dotenv:
        load_env_file_if_present()
    token = os.getenv(env_key)
    if not token:
        if required:
            raise AuthError(f"Missing API token. Set {env_key} in environment or .env")
        return None
    return token


def build_auth_headers(api_token: str | None) -> dict[str, str]:
    if not api_token:
        return {}
    return {"Authorization": f"Bearer {api_token}"}
