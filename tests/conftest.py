from __future__ import annotations

import os
from unittest.mock import Mock

import pytest

ENV_KEYS = ["TOKENAPI_KEY", "TOKEN_API_BASE_URL", "MAX_RETRIES", "TIMEOUT_MS", "CUSTOM_TOKEN"]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from the caller's environment and any local .env file."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    for key in ENV_KEYS:
        os.environ.pop(key, None)


@pytest.fixture
def no_sleep():
    """Stand-in for time.sleep so retry and pagination delays cost nothing."""
    return Mock(name="sleep")


def make_page(size: int, page: int = 1, total_pages: int = 3, offset: int = 0) -> dict:
    """Build a Token API collection response with `size` transfer records."""
    return {
        "data": [
            {"transaction_id": f"0x{offset + i:04x}", "value": float(offset + i)}
            for i in range(size)
        ],
        "statistics": {"elapsed": 0.01, "rows_read": size},
        "pagination": {"current_page": page, "total_pages": total_pages, "total_results": size},
    }


@pytest.fixture
def page_factory():
    return make_page


@pytest.fixture
def sample_transfers_response():
    """Sample /v1/evm/transfers response matching the Token API structure."""
    return {
        "data": [
            {
                "block_num": 22349873,
                "datetime": "2025-04-29 14:24:11",
                "transaction_id": "0xf6374799c227c9db38ff5ac1d5bebe8b607a1de1238cd861ebd1053ec07305ca",
                "contract": "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48",
                "from": "0x2b2e1d2ab4b9c1e5a2b1e3c4a7b3f0a1e2d3c4b5",
                "to": "0xd8da6bf26964af9d7eed9e03e53415d37aa96045",
                "decimals": 6,
                "symbol": "USDC",
                "value": 1500.25,
                "network": "mainnet",
            },
            {
                "block_num": 22349871,
                "datetime": "2025-04-29 14:23:47",
                "transaction_id": "0x0b4d1e2f3a4b5c6d7e8f9a0b1c2d3e4f5a6b7c8d9e0f1a2b3c4d5e6f7a8b9c0d",
                "contract": "0xdac17f958d2ee523a2206206994597c13d831ec7",
                "from": "0xd8da6bf26964af9d7eed9e03e53415d37aa96045",
                "to": "0x3c4a7b3f0a1e2d3c4b5a2b1e3c4a7b3f0a1e2d3c",
                "decimals": 6,
                "symbol": "USDT",
                "value": 42.0,
                "network": "mainnet",
            },
        ],
        "statistics": {"elapsed": 0.042, "rows_read": 1024, "bytes_read": 65536},
        "pagination": {"current_page": 1, "total_pages": 1, "total_results": 2},
    }


@pytest.fixture
def mock_ok_response(sample_transfers_response):
    response = Mock()
    response.status_code = 200
    response.json.return_value = sample_transfers_response
    return response
