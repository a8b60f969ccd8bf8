"""FastAPI application setup."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ticketsmith import __version__
from ticketsmith.ai import GenerationError, GenerationErrorKind
from ticketsmith.api.dependencies import close_store, configure_generation, init_store
from ticketsmith.api.models import APIResponse
from ticketsmith.api.routes import projects, tickets
from ticketsmith.generator import (
    InvalidTicketDataError,
    TicketGenerationError,
)
from ticketsmith.state_store import (
    NameMatch,
    PriorityExistsError,
    ProjectNotFoundError,
    StatusExistsError,
    StoreError,
    TicketNotFoundError,
)

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from ticketsmith.ai import OpenAIConfig

logger = logging.getLogger("ticketsmith.api")

DEFAULT_DB_PATH = "ticketsmith.db"

# User-facing wording for each generation failure, with the HTTP status used
GENERATION_ERRORS: dict[GenerationErrorKind, tuple[int, str]] = {
    GenerationErrorKind.CONFIG_MISSING: (
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "OpenAI API key is not configured",
    ),
    GenerationErrorKind.CONFIG_INVALID: (
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "AI service configuration is invalid, please check the settings",
    ),
    GenerationErrorKind.RATE_LIMITED: (
        status.HTTP_429_TOO_MANY_REQUESTS,
        "Rate limit reached, please try again later",
    ),
    GenerationErrorKind.UNAUTHORIZED: (
        status.HTTP_502_BAD_GATEWAY,
        "The AI service rejected the API key, please check the configuration",
    ),
    GenerationErrorKind.NETWORK_FAILURE: (
        status.HTTP_502_BAD_GATEWAY,
        "Could not reach the AI service, please check the connection",
    ),
    GenerationErrorKind.TIMEOUT: (
        status.HTTP_504_GATEWAY_TIMEOUT,
        "The AI service timed out, please try again",
    ),
    GenerationErrorKind.MALFORMED_RESPONSE: (
        status.HTTP_502_BAD_GATEWAY,
        "The AI service returned an invalid response",
    ),
}


def render_ticket_generation_error(exc: TicketGenerationError) -> str:
    """User-facing message for a validation failure in the generated batch."""
    if isinstance(exc, InvalidTicketDataError):
        return f"Invalid ticket data: ticket #{exc.index} is missing a {exc.field}"
    return "The AI service returned an invalid response"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=APIResponse[None](data=None, error=message).model_dump(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    init_store(app.state.db_path)
    configure_generation(app.state.openai_config, app.state.priority_match)
    logger.info("ticketsmith API started (db=%s)", app.state.db_path)
    yield
    close_store()


def create_app(
    db_path: str | None = None,
    openai_config: OpenAIConfig | None = None,
    priority_match: NameMatch = NameMatch.EXACT,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        db_path: SQLite path. Falls back to TICKETSMITH_DB_PATH, then ./ticketsmith.db.
        openai_config: Provider settings. Read from the environment when omitted.
        priority_match: Name comparison for the default priority lookup.
    """
    app = FastAPI(
        title="ticketsmith API",
        description="AI-assisted ticket generation for project boards",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.db_path = db_path or os.environ.get("TICKETSMITH_DB_PATH") or DEFAULT_DB_PATH
    app.state.openai_config = openai_config
    app.state.priority_match = priority_match

    register_exception_handlers(app)

    app.include_router(projects.router, prefix="/api/v1")
    app.include_router(tickets.router, prefix="/api/v1")
    app.include_router(tickets.ticket_router, prefix="/api/v1")

    return app


def register_exception_handlers(app: FastAPI) -> None:
    """Translate domain errors into API responses."""

    @app.exception_handler(GenerationError)
    async def generation_error_handler(_request: Request, exc: GenerationError) -> JSONResponse:
        status_code, message = GENERATION_ERRORS[exc.kind]
        return _error(status_code, message)

    @app.exception_handler(TicketGenerationError)
    async def ticket_generation_error_handler(
        _request: Request, exc: TicketGenerationError
    ) -> JSONResponse:
        return _error(422, render_ticket_generation_error(exc))

    @app.exception_handler(ProjectNotFoundError)
    async def project_not_found_handler(
        _request: Request, _exc: ProjectNotFoundError
    ) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, "Project not found")

    @app.exception_handler(TicketNotFoundError)
    async def ticket_not_found_handler(
        _request: Request, _exc: TicketNotFoundError
    ) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, "Ticket not found")

    @app.exception_handler(StatusExistsError)
    async def status_exists_handler(_request: Request, _exc: StatusExistsError) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, "Status with this name already exists")

    @app.exception_handler(PriorityExistsError)
    async def priority_exists_handler(
        _request: Request, _exc: PriorityExistsError
    ) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, "Priority with this name already exists")

    @app.exception_handler(StoreError)
    async def store_error_handler(_request: Request, _exc: StoreError) -> JSONResponse:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
