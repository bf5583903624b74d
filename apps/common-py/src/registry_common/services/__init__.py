"""Common services package."""

from registry_common.services.user_service import IdStrategy, InMemoryUserService, UserService

__all__ = [
    "IdStrategy",
    "InMemoryUserService",
    "UserService",
]
