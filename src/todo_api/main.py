"""
Application assembly for the Todo API.

``create_app`` builds a FastAPI instance around an explicitly owned store:
the repository is created here (or passed in), kept on
``app.state.repository`` for the request handlers, and cleared when the
application shuts down. ``app`` is a ready-made instance for ASGI servers::

    uvicorn todo_api.main:app
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .logging_config import setup_logging
from .repositories import InMemoryRepository, Repository, seed_sample_todos
from .routers import todos as todos_router
from .settings import Settings, get_settings
from .utils import validation_error_response

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "todos",
        "description": "Create, list, update and delete Todo items.",
    },
]


def _format_validation_errors(exc: RequestValidationError) -> List[str]:
    messages: List[str] = []
    for err in exc.errors():
        # Drop the "body"/"query" source marker from the location
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query")]
        msg = err.get("msg", "Invalid value")
        messages.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return messages


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None, repository: Optional[Repository] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use; read from the environment when omitted.
        repository: Store to serve; a new InMemoryRepository when omitted
            (seeded with the sample todos if settings allow).

    Returns:
        A configured FastAPI instance.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    if repository is None:
        repository = InMemoryRepository()
        if settings.seed_sample_todos:
            seed_sample_todos(repository)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Todo store ready with %d items", app.state.repository.count())
        yield
        app.state.repository.clear()
        logger.info("Todo store cleared")

    app = FastAPI(
        title="Todo API",
        description="Single-user todo list service backed by an in-memory store.",
        version="0.1.0",
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.repository = repository

    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Report unparseable bodies and wrongly typed fields in the envelope format.

        Response format:
            {"success": false, "errors": ["title: Input should be a valid string", ...]}
        """
        logger.debug("Rejected request to %s: %s", request.url.path, exc.errors())
        return validation_error_response(_format_validation_errors(exc))

    # PUBLIC_INTERFACE
    @app.get("/", summary="Health Check", tags=["health"])
    def health_check(request: Request):
        """
        Health check endpoint.

        Returns:
            A JSON object indicating service health and the number of stored todos.
        """
        return {"message": "Healthy", "todos": request.app.state.repository.count()}

    app.include_router(todos_router.router, prefix=settings.api_prefix)
    return app


app = create_app()
