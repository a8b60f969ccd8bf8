"""Shared pytest fixtures and configuration."""

import pytest

from ticketsmith.state_store import Project, TicketStore


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


@pytest.fixture
def store():
    """Create an in-memory TicketStore."""
    s = TicketStore(":memory:")
    yield s
    s.close()


@pytest.fixture
def project(store: TicketStore) -> Project:
    """A project with its backlog status and the medium priority seeded."""
    created = store.create_project(name="Demo", description="A small demo project")
    store.seed_defaults(created.id)
    return created
