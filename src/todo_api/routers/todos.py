from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, Request, status

from ..models import build_todo, validate_title
from ..repositories import Repository
from ..schemas import (
    ErrorEnvelope,
    MessageEnvelope,
    TodoCreate,
    TodoEnvelope,
    TodoListEnvelope,
    TodoUpdate,
    ValidationErrorEnvelope,
)
from ..utils import error_response, to_out, to_out_list, validation_error_response

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
)

TODO_NOT_FOUND = "Todo not found"
TODO_ID_REQUIRED = "Todo ID is required"


# PUBLIC_INTERFACE
def get_repository(request: Request) -> Repository:
    """
    Dependency returning the store owned by the running application.
    """
    return request.app.state.repository


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=TodoListEnvelope,
    summary="List Todos",
    description="Return every todo in insertion order.",
    responses={500: {"model": ErrorEnvelope, "description": "Failed to fetch todos"}},
)
def list_todos(repo: Repository = Depends(get_repository)):
    """
    List all todos.
    """
    try:
        return TodoListEnvelope(data=to_out_list(repo.get_all()))
    except Exception:
        logger.exception("Failed to fetch todos")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch todos")


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=TodoEnvelope,
    summary="Get Todo",
    description="Get a single Todo item by ID.",
    responses={
        404: {"model": ErrorEnvelope, "description": "Todo not found"},
        500: {"model": ErrorEnvelope, "description": "Failed to fetch todo"},
    },
)
def get_todo(todo_id: str, repo: Repository = Depends(get_repository)):
    """
    Retrieve a single Todo item by its ID.
    """
    try:
        item = repo.get(todo_id)
        if item is None:
            return error_response(status.HTTP_404_NOT_FOUND, TODO_NOT_FOUND)
        return TodoEnvelope(data=to_out(item))
    except Exception:
        logger.exception("Failed to fetch todo %s", todo_id)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch todo")


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TodoEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new Todo item and return the created resource.",
    responses={
        400: {"model": ValidationErrorEnvelope, "description": "Validation error"},
        500: {"model": ErrorEnvelope, "description": "Failed to create todo"},
    },
)
def create_todo(
    payload: Optional[TodoCreate] = Body(None),
    repo: Repository = Depends(get_repository),
):
    """
    Create a new Todo.
    """
    payload = payload or TodoCreate()
    try:
        errors = validate_title(payload.title)
        if errors:
            return validation_error_response(errors)

        created = repo.create(build_todo(payload.title or ""))
        logger.info("Created todo %s", created["id"])
        return TodoEnvelope(data=to_out(created))
    except Exception:
        logger.exception("Failed to create todo")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to create todo")


# PUBLIC_INTERFACE
@router.put(
    "",
    response_model=TodoEnvelope,
    summary="Update Todo",
    description=(
        "Update the title and/or completion flag of the todo named by `id` in the body. "
        "Fields other than title and completed are ignored."
    ),
    responses={
        400: {"description": "Missing id or invalid title"},
        404: {"model": ErrorEnvelope, "description": "Todo not found"},
        500: {"model": ErrorEnvelope, "description": "Failed to update todo"},
    },
)
def update_todo(
    payload: Optional[TodoUpdate] = Body(None),
    repo: Repository = Depends(get_repository),
):
    """
    Partial update of a Todo item.
    """
    payload = payload or TodoUpdate()
    try:
        if not payload.id:
            return error_response(status.HTTP_400_BAD_REQUEST, TODO_ID_REQUIRED)

        changes: Dict[str, Any] = {}
        if payload.title is not None:
            errors = validate_title(payload.title)
            if errors:
                return validation_error_response(errors)
            changes["title"] = payload.title.strip()
        if payload.completed is not None:
            changes["completed"] = payload.completed

        updated = repo.update(payload.id, changes)
        if updated is None:
            return error_response(status.HTTP_404_NOT_FOUND, TODO_NOT_FOUND)
        return TodoEnvelope(data=to_out(updated))
    except Exception:
        logger.exception("Failed to update todo")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to update todo")


# PUBLIC_INTERFACE
@router.delete(
    "",
    response_model=MessageEnvelope,
    summary="Delete Todo",
    description="Delete the todo whose id is given in the `id` query parameter.",
    responses={
        400: {"model": ErrorEnvelope, "description": "Todo ID is required"},
        404: {"model": ErrorEnvelope, "description": "Todo not found"},
        500: {"model": ErrorEnvelope, "description": "Failed to delete todo"},
    },
)
def delete_todo(
    todo_id: Optional[str] = Query(None, alias="id", description="Identifier of the todo to delete"),
    repo: Repository = Depends(get_repository),
):
    """
    Delete a Todo. Returns 404 if not found.
    """
    try:
        if not todo_id:
            return error_response(status.HTTP_400_BAD_REQUEST, TODO_ID_REQUIRED)

        if not repo.delete(todo_id):
            return error_response(status.HTTP_404_NOT_FOUND, TODO_NOT_FOUND)
        logger.info("Deleted todo %s", todo_id)
        return MessageEnvelope(message="Todo deleted")
    except Exception:
        logger.exception("Failed to delete todo %s", todo_id)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to delete todo")
