from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict

from user_registry.errors import NotFoundError, ValidationError
from user_registry.rwlock import ReadWriteLock

logger = logging.getLogger("user_registry.registry")


class IdPolicy(str, Enum):
    # Strictly increasing counter; an id is never handed out twice.
    monotonic = "monotonic"
    # Next id is len(users) + 1, so ids come back after a delete.
    size = "size"


@dataclass(frozen=True)
class User:
    name: str


class UserRegistry:
    """Thread-safe in-memory user registry.

    Storage semantics:
    - Stored only in process memory (cleared on restart).
    - Not shared across multiple API instances.
    - Reads (``get``, ``count``) share the lock; writes (``create``, ``delete``)
      take it exclusively for their whole check-then-act sequence.

    ``id_policy`` picks how ids are assigned, see ``IdPolicy``.
    """

    def __init__(self, *, id_policy: IdPolicy | str = IdPolicy.monotonic):
        self.id_policy = IdPolicy(id_policy)
        self._lock = ReadWriteLock()
        self._users: Dict[int, User] = {}
        self._counter = itertools.count(1)

    def create(self, name: str) -> int:
        if not name:
            raise ValidationError("User name can't be empty!")

        user = User(name=name)
        with self._lock.write_locked():
            user_id = self._next_id()
            self._users[user_id] = user
        logger.debug("Created user", extra={"user_id": user_id})
        return user_id

    def get(self, user_id: int) -> User:
        with self._lock.read_locked():
            user = self._users.get(user_id)
        if user is None:
            raise NotFoundError(user_id)
        return user

    def delete(self, user_id: int) -> None:
        with self._lock.write_locked():
            if user_id not in self._users:
                raise NotFoundError(user_id)
            del self._users[user_id]
        logger.debug("Deleted user", extra={"user_id": user_id})

    def count(self) -> int:
        with self._lock.read_locked():
            return len(self._users)

    def _next_id(self) -> int:
        # Caller holds the write lock.
        if self.id_policy is IdPolicy.size:
            return len(self._users) + 1
        return next(self._counter)
