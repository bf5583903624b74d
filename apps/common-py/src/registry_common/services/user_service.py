"""User service with an in-memory implementation."""

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Literal, get_args

from registry_common.models.user import User, UserIn

logger = logging.getLogger(__name__)

IdStrategy = Literal["counter", "size"]

UserPayload = UserIn | Mapping[str, Any]


class UserService(ABC):
    """Abstract interface for user service."""

    @abstractmethod
    def list_users(self) -> list[User]:
        """List all users in insertion order."""

    @abstractmethod
    def get_user(self, user_id: int) -> User | None:
        """Get a user by ID."""

    @abstractmethod
    def create_user(self, payload: UserPayload) -> User:
        """Validate a payload and store it as a new user."""

    @abstractmethod
    def update_user(self, user_id: int, payload: UserPayload) -> User | None:
        """Replace the writable fields of an existing user."""

    @abstractmethod
    def delete_user(self, user_id: int) -> bool:
        """Delete a user."""

    @abstractmethod
    def count(self) -> int:
        """Number of stored users."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every user."""


def _as_user_in(payload: UserPayload) -> UserIn:
    """Validate a raw mapping; raises ``pydantic.ValidationError`` on bad input."""
    if isinstance(payload, UserIn):
        return payload
    return UserIn.model_validate(dict(payload))


class InMemoryUserService(UserService):
    """Service for managing users in memory.

    All reads and writes go through a single lock, so check-then-mutate
    sequences such as id assignment or lookup-then-delete are atomic.

    Ids come from ``id_strategy``:

    * ``"counter"``: a monotonic counter; ids are never reused.
    * ``"size"``: ``len(users) + 1``. After a deletion this can hand out an id
      that is still stored. Only useful for reproducing legacy clients.
    """

    def __init__(self, id_strategy: IdStrategy = "counter") -> None:
        """Initialize the service.

        Args:
            id_strategy: How new ids are assigned ("counter" or "size")
        """
        if id_strategy not in get_args(IdStrategy):
            raise ValueError(f"Unknown id strategy: {id_strategy!r}")
        self.id_strategy = id_strategy
        self._users: list[User] = []
        self._last_id = 0
        self._lock = threading.Lock()

    def _next_id(self) -> int:
        if self.id_strategy == "size":
            return len(self._users) + 1
        self._last_id += 1
        return self._last_id

    def _find(self, user_id: int) -> User | None:
        for user in self._users:
            if user.id == user_id:
                return user
        return None

    def list_users(self) -> list[User]:
        """List all users in insertion order."""
        with self._lock:
            return [user.model_copy() for user in self._users]

    def get_user(self, user_id: int) -> User | None:
        """Get a user by ID."""
        with self._lock:
            user = self._find(user_id)
            found = user.model_copy() if user is not None else None
        if found is None:
            logger.debug("User %s not found", user_id)
        return found

    def create_user(self, payload: UserPayload) -> User:
        """Validate a payload and store it under a new ID."""
        data = _as_user_in(payload)
        with self._lock:
            user = User(id=self._next_id(), **data.model_dump())
            self._users.append(user)
            created = user.model_copy()
        logger.info("Created user %s (%s)", created.id, created.username)
        return created

    def update_user(self, user_id: int, payload: UserPayload) -> User | None:
        """Replace username, email and name of an existing user."""
        data = _as_user_in(payload)
        with self._lock:
            user = self._find(user_id)
            if user is None:
                logger.debug("User %s not found", user_id)
                return None
            user.username = data.username
            user.email = data.email
            user.name = data.name
            updated = user.model_copy()
        logger.info("Updated user %s", user_id)
        return updated

    def delete_user(self, user_id: int) -> bool:
        """Delete a user."""
        with self._lock:
            user = self._find(user_id)
            if user is None:
                logger.debug("User %s not found", user_id)
                return False
            self._users = [stored for stored in self._users if stored is not user]
        logger.info("Deleted user %s", user_id)
        return True

    def count(self) -> int:
        """Number of stored users."""
        with self._lock:
            return len(self._users)

    def clear(self) -> None:
        """Remove every user and reset the ID counter."""
        with self._lock:
            self._users.clear()
            self._last_id = 0
        logger.info("Cleared all users")
