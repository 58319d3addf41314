from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from threading import RLock
from typing import Any, List, Mapping, Optional

from .models import TodoEntity, utc_now

logger = logging.getLogger(__name__)

# Fields a client may change after creation; id and created_at are fixed.
MUTABLE_FIELDS = ("title", "completed")


class DuplicateTodoError(ValueError):
    """Raised when a record is inserted with an id that is already stored."""


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for todo storage backends."""

    @abstractmethod
    def get_all(self) -> List[TodoEntity]:
        """Return all TodoEntities in insertion order."""

    @abstractmethod
    def get(self, todo_id: str) -> Optional[TodoEntity]:
        """Return a TodoEntity by id, or None if not found."""

    @abstractmethod
    def create(self, entity: TodoEntity) -> TodoEntity:
        """Store a new TodoEntity and return it."""

    @abstractmethod
    def update(self, todo_id: str, changes: Mapping[str, Any]) -> Optional[TodoEntity]:
        """Merge mutable fields into an existing TodoEntity. Return it, or None if not found."""

    @abstractmethod
    def delete(self, todo_id: str) -> bool:
        """Delete a TodoEntity by id. Return True if deleted, False if not found."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored TodoEntities."""

    @abstractmethod
    def clear(self) -> None:
        """Drop every stored TodoEntity."""


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository holding todos in insertion order.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: List[TodoEntity] = []

    def _index_of(self, todo_id: str) -> int:
        for i, item in enumerate(self._items):
            if item["id"] == todo_id:
                return i
        return -1

    def get_all(self) -> List[TodoEntity]:
        with self._lock:
            return [t.copy() for t in self._items]

    def get(self, todo_id: str) -> Optional[TodoEntity]:
        with self._lock:
            i = self._index_of(todo_id)
            return None if i < 0 else self._items[i].copy()

    def create(self, entity: TodoEntity) -> TodoEntity:
        with self._lock:
            if self._index_of(entity["id"]) >= 0:
                raise DuplicateTodoError(f"Todo id already exists: {entity['id']}")
            stored = entity.copy()
            self._items.append(stored)
            logger.debug("Created todo %s", stored["id"])
            return stored.copy()

    def update(self, todo_id: str, changes: Mapping[str, Any]) -> Optional[TodoEntity]:
        with self._lock:
            i = self._index_of(todo_id)
            if i < 0:
                return None

            # Shallow overwrite of the whitelisted fields only
            updated = self._items[i].copy()
            for field in MUTABLE_FIELDS:
                if field in changes:
                    updated[field] = changes[field]  # type: ignore[literal-required]

            self._items[i] = updated
            logger.debug("Updated todo %s", todo_id)
            return updated.copy()

    def delete(self, todo_id: str) -> bool:
        with self._lock:
            i = self._index_of(todo_id)
            if i < 0:
                return False
            del self._items[i]
            logger.debug("Deleted todo %s", todo_id)
            return True

    def count(self) -> int:
        with self._lock:
            return len(self._items)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()


SAMPLE_TODOS = (
    ("1", "Learn the Todo API"),
    ("2", "Deploy the service"),
)


# PUBLIC_INTERFACE
def seed_sample_todos(repo: Repository) -> None:
    """Insert the sample todos a fresh installation starts with."""
    now = utc_now()
    for todo_id, title in SAMPLE_TODOS:
        if repo.get(todo_id) is None:
            repo.create({"id": todo_id, "title": title, "completed": False, "created_at": now})
    logger.info("Seeded %d sample todos", len(SAMPLE_TODOS))
