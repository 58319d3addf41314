from __future__ import annotations

from typing import Iterable, List

from fastapi.responses import JSONResponse

from .models import TodoEntity
from .schemas import ErrorEnvelope, TodoOut, ValidationErrorEnvelope


# PUBLIC_INTERFACE
def error_response(status_code: int, message: str) -> JSONResponse:
    """
    Build a failure envelope response with a single message.

    Returns:
        JSONResponse with body {"success": false, "error": message}.
    """
    return JSONResponse(
        status_code=status_code,
        content=ErrorEnvelope(error=message).model_dump(),
    )


# PUBLIC_INTERFACE
def validation_error_response(errors: Iterable[str], status_code: int = 400) -> JSONResponse:
    """
    Build a failure envelope response listing every violation.

    Returns:
        JSONResponse with body {"success": false, "errors": [...]}.
    """
    return JSONResponse(
        status_code=status_code,
        content=ValidationErrorEnvelope(errors=list(errors)).model_dump(),
    )


def to_out(entity: TodoEntity) -> TodoOut:
    return TodoOut(**entity)


def to_out_list(entities: Iterable[TodoEntity]) -> List[TodoOut]:
    return [to_out(e) for e in entities]
