from __future__ import annotations

import os

from tokenapi.utils.env import load_env_file_if_present


class TestLoadEnvFileIfPresent:
    def test_load_existing_env_file(self, clean_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(
            """
# Token API credentials
TOKENAPI_KEY=test_key_123
TOKEN_API_BASE_URL=https://custom.api.com
EMPTY_LINE=

export MAX_RETRIES=5
TIMEOUT_MS="250"
CUSTOM_TOKEN='single_quoted'
"""
        )

        result = load_env_file_if_present(env_file)

        assert result == {
            "TOKENAPI_KEY": "test_key_123",
            "TOKEN_API_BASE_URL": "https://custom.api.com",
            "EMPTY_LINE": "",
            "MAX_RETRIES": "5",
            "TIMEOUT_MS": "250",
            "CUSTOM_TOKEN": "single_quoted",
        }
        assert os.environ["TOKENAPI_KEY"] == "test_key_123"
        assert os.environ["MAX_RETRIES"] == "5"
        assert os.environ["TIMEOUT_MS"] == "250"
        os.environ.pop("EMPTY_LINE", None)

    def test_nonexistent_file_returns_empty_dict(self, tmp_path):
        assert load_env_file_if_present(tmp_path / "missing.env") == {}

    def test_existing_variables_not_overridden(self, clean_env, monkeypatch, tmp_path):
        monkeypatch.setenv("TOKENAPI_KEY", "original")
        env_file = tmp_path / ".env"
        env_file.write_text("TOKENAPI_KEY=from_file\n")

        result = load_env_file_if_present(env_file)

        assert result == {"TOKENAPI_KEY": "from_file"}
        assert os.environ["TOKENAPI_KEY"] == "original"

    def test_override_replaces_existing(self, clean_env, monkeypatch, tmp_path):
        monkeypatch.setenv("TOKENAPI_KEY", "original")
        env_file = tmp_path / ".env"
        env_file.write_text("TOKENAPI_KEY=from_file\n")

        load_env_file_if_present(env_file, override=True)

        assert os.environ["TOKENAPI_KEY"] == "from_file"

    def test_malformed_lines_skipped(self, clean_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("no equals sign\n=missing_key\nTIMEOUT_MS=10\n")

        assert load_env_file_if_present(env_file) == {"TIMEOUT_MS": "10"}
