"""Tests for environment-driven defaults."""

from __future__ import annotations

import pytest

from tokenapi.config import DEFAULT_BASE_URL, policy_defaults_from_env, resolve_base_url
from tokenapi.errors import ConfigError


class TestPolicyDefaults:
    def test_defaults_without_environment(self, clean_env):
        assert policy_defaults_from_env() == (3, 10_000)

    def test_values_from_environment(self, clean_env, monkeypatch):
        monkeypatch.setenv("MAX_RETRIES", "0")
        monkeypatch.setenv("TIMEOUT_MS", "250")

        assert policy_defaults_from_env() == (0, 250)

    def test_values_from_dotenv(self, clean_env, tmp_path):
        (tmp_path / ".env").write_text("MAX_RETRIES=7\nTIMEOUT_MS=1\n")

        assert policy_defaults_from_env() == (7, 1)

    def test_blank_value_falls_back_to_default(self, clean_env, monkeypatch):
        monkeypatch.setenv("MAX_RETRIES", "  ")
        assert policy_defaults_from_env(dotenv=False) == (3, 10_000)

    def test_non_integer_raises(self, clean_env, monkeypatch):
        monkeypatch.setenv("MAX_RETRIES", "many")

        with pytest.raises(ConfigError, match="MAX_RETRIES must be an integer"):
            policy_defaults_from_env(dotenv=False)

    def test_negative_raises(self, clean_env, monkeypatch):
        monkeypatch.setenv("TIMEOUT_MS", "-5")

        with pytest.raises(ConfigError, match="must not be negative"):
            policy_defaults_from_env(dotenv=False)


class TestResolveBaseUrl:
    def test_default(self, clean_env):
        assert resolve_base_url() == DEFAULT_BASE_URL == "https://token-api.thegraph.com"

    def test_environment(self, clean_env, monkeypatch):
        monkeypatch.setenv("TOKEN_API_BASE_URL", "https://staging.example.com/")
        assert resolve_base_url() == "https://staging.example.com"

    def test_explicit_argument_wins(self, clean_env, monkeypatch):
        monkeypatch.setenv("TOKEN_API_BASE_URL", "https://staging.example.com")
        assert resolve_base_url("https://local:8000") == "https://local:8000"
