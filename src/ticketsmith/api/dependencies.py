"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import Annotated

from fastapi import Depends

from ticketsmith.ai import GenerationClient, OpenAIClient, OpenAIConfig
from ticketsmith.generator import TicketGeneratorService
from ticketsmith.state_store import NameMatch, Project, TicketStore

# Global TicketStore instance (initialized on app startup)
_store: TicketStore | None = None

# OpenAI settings; None means read from the environment per request
_openai_config: OpenAIConfig | None = None

_priority_match: NameMatch = NameMatch.EXACT


def init_store(db_path: str = "ticketsmith.db") -> TicketStore:
    """Initialize the global TicketStore instance."""
    global _store  # noqa: PLW0603
    _store = TicketStore(db_path)
    return _store


def close_store() -> None:
    """Close the global TicketStore instance."""
    global _store  # noqa: PLW0603
    if _store is not None:
        _store.close()
        _store = None


def get_store() -> Generator[TicketStore, None, None]:
    """Dependency that provides the TicketStore instance."""
    if _store is None:
        raise RuntimeError("TicketStore not initialized. Call init_store() first.")
    yield _store


StoreDep = Annotated[TicketStore, Depends(get_store)]


def get_project(project_id: int, store: StoreDep) -> Project:
    """Dependency that loads the path's project or raises ProjectNotFoundError."""
    return store.get_project(project_id)


ProjectDep = Annotated[Project, Depends(get_project)]


def configure_generation(
    openai_config: OpenAIConfig | None = None,
    priority_match: NameMatch = NameMatch.EXACT,
) -> None:
    """Set the settings used to build generation clients."""
    global _openai_config, _priority_match  # noqa: PLW0603
    _openai_config = openai_config
    _priority_match = priority_match


def get_generation_client() -> Generator[GenerationClient, None, None]:
    """Dependency that provides a fresh OpenAI client for one request.

    Built per request so configuration errors surface as API errors rather
    than at startup.
    """
    client = OpenAIClient(_openai_config)
    try:
        yield client
    finally:
        client.close()


GenerationClientDep = Annotated[GenerationClient, Depends(get_generation_client)]


def get_generator(
    store: StoreDep, client: GenerationClientDep
) -> Generator[TicketGeneratorService, None, None]:
    """Dependency that provides the ticket generator service."""
    yield TicketGeneratorService(client=client, store=store, priority_match=_priority_match)


GeneratorDep = Annotated[TicketGeneratorService, Depends(get_generator)]
