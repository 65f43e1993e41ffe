# ─────────────────────────────────────────────────────────────────────────────
# Test Fixtures — shared across all tests
# ─────────────────────────────────────────────────────────────────────────────

from collections.abc import Callable

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from remitlend.config import Settings
from remitlend.main import create_app

TEST_API_KEY = "abc123"
ALLOWED_ORIGIN = "https://app.remitlend.test"

# 32-byte history hashes, hex encoded
HASH_1 = "01" + "00" * 31
HASH_2 = "02" + "00" * 31


def make_settings(**overrides: object) -> Settings:
    """Settings for tests: explicit values only, .env and environment ignored."""
    values: dict[str, object] = {
        "internal_api_key": TEST_API_KEY,
        "cors_allowed_origins": ALLOWED_ORIGIN,
        "rate_limit": "1000/minute",
        "log_json": False,
        "log_level": "DEBUG",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)  # type: ignore[arg-type]


@pytest.fixture
def test_settings() -> Settings:
    return make_settings()


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    return create_app(test_settings)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """FastAPI TestClient against an app with the test API key configured."""
    return TestClient(app)


@pytest.fixture
def make_client() -> Callable[..., TestClient]:
    """Build a client from Settings overrides, e.g. make_client(internal_api_key="")."""

    def _make(**overrides: object) -> TestClient:
        return TestClient(create_app(make_settings(**overrides)), raise_server_exceptions=False)

    return _make


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"x-api-key": TEST_API_KEY}
