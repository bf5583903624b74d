"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from registry_api.config import Settings
from registry_api.main import create_app


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as fast unit tests")


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None, environment="test")


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """Create a fresh application with an empty user store."""
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """Create a FastAPI test client."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth() -> dict[str, str]:
    """Query parameters that satisfy the access gate."""
    return {"authenticated": "true"}


@pytest.fixture
def ann() -> dict[str, str]:
    """A valid user payload."""
    return {"username": "ann01", "email": "a@b.com", "name": "Ann"}
