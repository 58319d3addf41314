from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Callable, List, Mapping, Optional, TypedDict

TITLE_MAX_LENGTH = 100

TITLE_REQUIRED = "Title is required"
TITLE_TOO_LONG = f"Title must be less than {TITLE_MAX_LENGTH} characters"


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    Domain record for a Todo item as held by the store.

    Fields:
    - id: Opaque unique identifier, assigned at creation
    - title: Trimmed title (non-blank, at most 100 chars)
    - completed: Boolean completion flag
    - created_at: Timezone-aware UTC creation timestamp
    """

    id: str
    title: str
    completed: bool
    created_at: datetime


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# PUBLIC_INTERFACE
def new_todo_id() -> str:
    """Return a fresh identifier for a Todo."""
    return uuid.uuid4().hex


# PUBLIC_INTERFACE
def validate_title(title: Optional[Any]) -> List[str]:
    """
    Check a candidate title and return the list of violations (empty if valid).

    The length rule is applied to the raw value, before trimming. Both rules
    are evaluated independently, so a long whitespace-only title reports both.
    """
    errors: List[str] = []
    text = title if isinstance(title, str) else ""

    if not text.strip():
        errors.append(TITLE_REQUIRED)

    if len(text) > TITLE_MAX_LENGTH:
        errors.append(TITLE_TOO_LONG)

    return errors


# PUBLIC_INTERFACE
def validate_todo(candidate: Mapping[str, Any]) -> List[str]:
    """Validate a (possibly partial) Todo record."""
    return validate_title(candidate.get("title"))


# PUBLIC_INTERFACE
def build_todo(
    title: str,
    *,
    id_factory: Callable[[], str] = new_todo_id,
    clock: Callable[[], datetime] = utc_now,
) -> TodoEntity:
    """
    Construct a new, not yet stored, Todo from a title.

    The title is trimmed, the record starts out incomplete and is stamped with
    the current time.
    """
    return {
        "id": id_factory(),
        "title": title.strip(),
        "completed": False,
        "created_at": clock(),
    }
