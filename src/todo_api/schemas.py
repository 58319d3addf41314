from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Schema for creating a new Todo item.

    The title is checked by the handler (see models.validate_title) so that
    blank and over-long titles come back as envelope messages.
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"title": "Buy milk"}},
    )

    title: Optional[str] = Field(default=None, description="Short title for the todo item (max 100 chars)")


# PUBLIC_INTERFACE
class TodoUpdate(BaseModel):
    """
    Schema for updating an existing Todo item.
    Only title and completed can change; any other key is ignored.
    """

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={"example": {"id": "1", "completed": True}},
    )

    id: Optional[str] = Field(default=None, description="Identifier of the todo to update")
    title: Optional[str] = Field(default=None, description="New title (max 100 chars)")
    completed: Optional[bool] = Field(default=None, description="New completion status")


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "3f2b8c1e9a7d4e0f8b6c5a4d3e2f1a0b",
                "title": "Buy milk",
                "completed": False,
                "createdAt": "2025-01-25T10:15:30.123456Z",
            }
        },
    )

    id: str = Field(..., description="Unique identifier of the todo item")
    title: str = Field(..., description="Short title for the todo item")
    completed: bool = Field(..., description="Completion status flag")
    created_at: datetime = Field(..., alias="createdAt", description="Creation timestamp")


class TodoEnvelope(BaseModel):
    success: Literal[True] = True
    data: TodoOut


class TodoListEnvelope(BaseModel):
    success: Literal[True] = True
    data: List[TodoOut]


class MessageEnvelope(BaseModel):
    success: Literal[True] = True
    message: str


class ErrorEnvelope(BaseModel):
    """Single-message failure (not found, missing id, internal fault)."""

    success: Literal[False] = False
    error: str


class ValidationErrorEnvelope(BaseModel):
    """Failure carrying one message per violated rule."""

    success: Literal[False] = False
    errors: List[str]
