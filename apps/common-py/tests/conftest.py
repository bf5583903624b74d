"""Pytest configuration for common-py tests."""

import pytest
from registry_common.services.user_service import InMemoryUserService


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as fast unit tests")


@pytest.fixture
def service() -> InMemoryUserService:
    """An empty in-memory user service."""
    return InMemoryUserService()


@pytest.fixture
def ann() -> dict[str, str]:
    """A valid user payload."""
    return {"username": "ann01", "email": "a@b.com", "name": "Ann"}
