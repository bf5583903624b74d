"""Common models package."""

from registry_common.models.user import User, UserIn, validation_messages

__all__ = [
    "User",
    "UserIn",
    "validation_messages",
]
