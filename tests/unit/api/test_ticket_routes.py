"""Unit tests for ticket routes and error rendering."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from fakes import FakeGenerationClient, sample_tickets, tickets_json
from ticketsmith.ai import GenerationErrorKind, RateLimitedError
from ticketsmith.api.app import (
    GENERATION_ERRORS,
    register_exception_handlers,
    render_ticket_generation_error,
)
from ticketsmith.api.dependencies import get_generator, get_store
from ticketsmith.api.routes import tickets
from ticketsmith.generator import (
    EmptyTicketBatchError,
    InvalidTicketDataError,
    TicketGeneratorService,
)
from ticketsmith.state_store import Project, TicketStore


@pytest.fixture
def fake_client() -> FakeGenerationClient:
    return FakeGenerationClient(tickets_json(*sample_tickets(4)))


@pytest.fixture
def app(store: TicketStore, fake_client: FakeGenerationClient) -> FastAPI:
    """Create a test FastAPI app with the store and generator overridden."""
    app = FastAPI()

    def override_get_store():
        yield store

    def override_get_generator():
        yield TicketGeneratorService(fake_client, store)

    app.dependency_overrides[get_store] = override_get_store
    app.dependency_overrides[get_generator] = override_get_generator

    register_exception_handlers(app)
    app.include_router(tickets.router, prefix="/api/v1")
    app.include_router(tickets.ticket_router, prefix="/api/v1")
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


@pytest.mark.unit
class TestGenerateRoute:
    """Tests for POST /projects/{id}/tickets/generate."""

    def test_returns_created_count(self, client: TestClient, project: Project) -> None:
        response = client.post(f"/api/v1/projects/{project.id}/tickets/generate", json={})

        assert response.status_code == 201
        assert response.json()["data"] == {"created": 4}

    def test_body_is_optional_prompt(
        self, client: TestClient, project: Project, fake_client: FakeGenerationClient
    ) -> None:
        client.post(
            f"/api/v1/projects/{project.id}/tickets/generate", json={"prompt": "Mobile first"}
        )

        assert "Mobile first" in fake_client.prompts[0]

    def test_rate_limit_rendered(
        self, client: TestClient, project: Project, fake_client: FakeGenerationClient
    ) -> None:
        fake_client.error = RateLimitedError("60")

        response = client.post(f"/api/v1/projects/{project.id}/tickets/generate", json={})

        assert response.status_code == 429
        assert response.json() == {
            "data": None,
            "error": "Rate limit reached, please try again later",
        }

    def test_missing_project_skips_generator(self, app: FastAPI) -> None:
        built: list[bool] = []

        def tracking_generator():
            built.append(True)
            yield None

        app.dependency_overrides[get_generator] = tracking_generator
        client = TestClient(app, raise_server_exceptions=False)

        response = client.post("/api/v1/projects/999/tickets/generate", json={})

        assert response.status_code == 404
        assert built == []


@pytest.mark.unit
class TestListRoute:
    """Tests for GET /projects/{id}/tickets."""

    def test_lists_in_creation_order(
        self, client: TestClient, store: TicketStore, project: Project
    ) -> None:
        store.create_ticket(project.id, "One", "D")
        store.create_ticket(project.id, "Two", "D")

        data = client.get(f"/api/v1/projects/{project.id}/tickets").json()["data"]

        assert [t["name"] for t in data] == ["One", "Two"]
        assert data[0]["project_id"] == project.id


@pytest.mark.unit
class TestErrorRendering:
    """Tests for user-facing error text."""

    def test_every_generation_kind_has_a_message(self) -> None:
        assert set(GENERATION_ERRORS) == set(GenerationErrorKind)

    def test_invalid_ticket_data_message(self) -> None:
        message = render_ticket_generation_error(InvalidTicketDataError(2, "title"))

        assert message == "Invalid ticket data: ticket #2 is missing a title"

    def test_empty_batch_message(self) -> None:
        message = render_ticket_generation_error(EmptyTicketBatchError())

        assert message == "The AI service returned an invalid response"


@pytest.mark.unit
class TestGetTicketRoute:
    """Tests for GET /tickets/{id}."""

    def test_returns_ticket(self, client: TestClient, store: TicketStore, project: Project) -> None:
        ticket = store.create_ticket(project.id, "Only", "Body")

        response = client.get(f"/api/v1/tickets/{ticket.id}")

        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Only"

    def test_unknown_ticket_is_404(self, client: TestClient) -> None:
        response = client.get("/api/v1/tickets/31337")

        assert response.status_code == 404
        assert response.json()["error"] == "Ticket not found"
