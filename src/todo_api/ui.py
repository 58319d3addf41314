"""
Client-side view model for the todo list page.

``TodoListState`` holds what a page displays: the mirrored list, the text
being typed, loading and error flags, the selected todo, and the active
filter and search term. Its actions call the API through ``TodoApiClient``
and only touch local state once the server confirms success.
"""
from __future__ import annotations

import enum
import logging
from typing import Any, Dict, List, NamedTuple, Optional, Union

import httpx

logger = logging.getLogger(__name__)

TodoDict = Dict[str, Any]
Envelope = Dict[str, Any]


class FilterMode(str, enum.Enum):
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


class TodoCounts(NamedTuple):
    total: int
    active: int
    completed: int


# PUBLIC_INTERFACE
class TodoApiClient:
    """
    JSON client for the todos collection.

    Every method returns the decoded response envelope whatever the status
    code; transport failures surface as ``httpx.HTTPError`` and undecodable
    bodies as ``ValueError``.
    """

    def __init__(self, http: httpx.Client, path: str = "/todos") -> None:
        self._http = http
        self._path = path

    @classmethod
    def from_base_url(cls, base_url: str, path: str = "/todos") -> "TodoApiClient":
        return cls(httpx.Client(base_url=base_url), path=path)

    def close(self) -> None:
        self._http.close()

    def list_todos(self) -> Envelope:
        return self._http.get(self._path).json()

    def create_todo(self, title: str) -> Envelope:
        return self._http.post(self._path, json={"title": title}).json()

    def update_todo(self, todo_id: str, **changes: Any) -> Envelope:
        return self._http.put(self._path, json={"id": todo_id, **changes}).json()

    def delete_todo(self, todo_id: str) -> Envelope:
        return self._http.delete(self._path, params={"id": todo_id}).json()


# PUBLIC_INTERFACE
class TodoListState:
    """
    Local state of the todo list page and the actions that change it.
    """

    def __init__(self, api: TodoApiClient) -> None:
        self.api = api
        self.todos: List[TodoDict] = []
        self.new_todo = ""
        self.loading = True
        self.error = ""
        self.selected: Optional[TodoDict] = None
        self.filter = FilterMode.ALL
        self.search_term = ""

    @classmethod
    def connect(cls, base_url: str, path: str = "/todos") -> "TodoListState":
        """Build a state bound to a running server."""
        return cls(TodoApiClient.from_base_url(base_url, path=path))

    def load(self) -> None:
        """Fetch the full list from the server (initial display)."""
        self.loading = True
        try:
            result = self.api.list_todos()
            if result.get("success"):
                self.todos = list(result["data"])
            else:
                self.error = "Failed to fetch todos"
        except (httpx.HTTPError, ValueError):
            logger.warning("Fetching todos failed", exc_info=True)
            self.error = "Error fetching todos"
        finally:
            self.loading = False

    def add(self) -> None:
        if not self.new_todo.strip():
            return

        try:
            result = self.api.create_todo(self.new_todo)
        except (httpx.HTTPError, ValueError):
            logger.warning("Adding todo failed", exc_info=True)
            self.error = "Error adding todo"
            return

        if result.get("success"):
            self.todos = [result["data"], *self.todos]
            self.new_todo = ""
            self.error = ""
        else:
            errors = result.get("errors") or []
            self.error = errors[0] if errors else "Failed to add todo"

    def toggle(self, todo_id: str) -> None:
        """Flip the completion flag of a todo."""
        current = self._find(todo_id)
        if current is None:
            return

        try:
            result = self.api.update_todo(todo_id, completed=not current["completed"])
        except (httpx.HTTPError, ValueError):
            logger.warning("Updating todo %s failed", todo_id, exc_info=True)
            self.error = "Error updating todo"
            return

        if not result.get("success"):
            self.error = "Failed to update todo"
            return

        updated = result["data"]
        self.todos = [updated if t["id"] == todo_id else t for t in self.todos]
        if self.selected is not None and self.selected["id"] == todo_id:
            self.selected = updated

    def delete(self, todo_id: str) -> None:
        try:
            result = self.api.delete_todo(todo_id)
        except (httpx.HTTPError, ValueError):
            logger.warning("Deleting todo %s failed", todo_id, exc_info=True)
            self.error = "Error deleting todo"
            return

        if not result.get("success"):
            self.error = "Failed to delete todo"
            return

        self.todos = [t for t in self.todos if t["id"] != todo_id]
        if self.selected is not None and self.selected["id"] == todo_id:
            self.selected = None

    def select(self, todo_id: str) -> None:
        self.selected = self._find(todo_id)

    def deselect(self) -> None:
        self.selected = None

    def set_filter(self, mode: Union[FilterMode, str]) -> None:
        self.filter = FilterMode(mode)

    @property
    def visible_todos(self) -> List[TodoDict]:
        """Todos passing both the filter mode and the title search."""
        term = self.search_term.lower()
        return [t for t in self.todos if self._matches_filter(t) and term in t["title"].lower()]

    @property
    def counts(self) -> TodoCounts:
        completed = sum(1 for t in self.todos if t["completed"])
        return TodoCounts(total=len(self.todos), active=len(self.todos) - completed, completed=completed)

    @property
    def empty_message(self) -> str:
        if self.search_term:
            return "Try adjusting your search."
        return "Add a new todo to get started!"

    def _matches_filter(self, todo: TodoDict) -> bool:
        if self.filter is FilterMode.ACTIVE:
            return not todo["completed"]
        if self.filter is FilterMode.COMPLETED:
            return bool(todo["completed"])
        return True

    def _find(self, todo_id: str) -> Optional[TodoDict]:
        for todo in self.todos:
            if todo["id"] == todo_id:
                return todo
        return None
