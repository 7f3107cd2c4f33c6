from __future__ import annotations

import pytest

from tokenapi.auth import build_auth_headers, load_api_token
from tokenapi.errors import AuthError


class TestLoadApiToken:
    def test_load_from_environment(self, clean_env, monkeypatch):
        monkeypatch.setenv("TOKENAPI_KEY", "test_token_123")
        assert load_api_token(dotenv=False) == "test_token_123"

    def test_load_from_dotenv_file(self, clean_env, tmp_path):
        (tmp_path / ".env").write_text("TOKENAPI_KEY=dotenv_token_456\n")

        assert load_api_token() == "dotenv_token_456"

    def test_missing_token_returns_none(self, clean_env):
        assert load_api_token(dotenv=False) is None

    def test_missing_token_raises_when_required(self, clean_env):
        with pytest.raises(AuthError, match="Missing API token"):
            load_api_token(dotenv=False, required=True)

    def test_custom_env_key(self, clean_env, monkeypatch):
        monkeypatch.setenv("CUSTOM_TOKEN", "custom_value")
        assert load_api_token(env_key="CUSTOM_TOKEN", dotenv=False) == "custom_value"

    def test_environment_wins_over_dotenv(self, clean_env, monkeypatch, tmp_path):
        (tmp_path / ".env").write_text("TOKENAPI_KEY=from_file\n")
        monkeypatch.setenv("TOKENAPI_KEY", "from_env")

        assert load_api_token() == "from_env"


class TestBuildAuthHeaders:
    def test_bearer_header(self):
        assert build_auth_headers("abc") == {"Authorization": "Bearer abc"}

    @pytest.mark.parametrize("token", [None, ""])
    def test_no_token_no_header(self, token):
        assert build_auth_headers(token) == {}
