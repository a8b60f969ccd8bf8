"""End-to-end generation tests: real client over a mock transport and a real store."""

from collections.abc import Callable

import httpx
import pytest
from sqlalchemy.exc import IntegrityError

from fakes import VALID_API_KEY, chat_completion, tickets_json
from ticketsmith.ai import (
    MalformedResponseError,
    OpenAIClient,
    OpenAIConfig,
    RateLimitedError,
)
from ticketsmith.generator import TicketGeneratorService
from ticketsmith.state_store import Project, TicketBatch, TicketStore

Handler = Callable[[httpx.Request], httpx.Response]


def _service(store: TicketStore, handler: Handler) -> TicketGeneratorService:
    client = OpenAIClient(
        OpenAIConfig(api_key=VALID_API_KEY),
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )
    return TicketGeneratorService(client, store)


def _content(content: str) -> Handler:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=chat_completion(content))

    return handler


@pytest.mark.integration
class TestGenerationScenarios:
    """Full pipeline from HTTP response to persisted rows."""

    def test_three_valid_drafts_persisted(self, store: TicketStore, project: Project) -> None:
        """Three drafts become three tickets; criteria render only when present."""
        raw = tickets_json(
            {
                "title": "Set up repository",
                "description": "Create the repo and CI.",
                "acceptance_criteria": ["Repo exists", "CI runs on push"],
            },
            {
                "title": "Design schema",
                "description": "Model the core tables.",
                "acceptance_criteria": [],
            },
            {
                "title": "Write README",
                "description": "Document setup steps.",
                "acceptance_criteria": ["Install steps listed"],
            },
        )

        created = _service(store, _content(raw)).generate_for_project(project)

        assert created == 3
        tickets = store.list_tickets(project.id)
        assert [t.name for t in tickets] == [
            "Set up repository",
            "Design schema",
            "Write README",
        ]
        assert tickets[0].description == (
            "Create the repo and CI.\n\n**Acceptance Criteria:**\n"
            "- Repo exists\n- CI runs on push\n"
        )
        assert tickets[1].description == "Model the core tables."
        assert "**Acceptance Criteria:**" not in tickets[1].description
        assert tickets[2].description.endswith("- Install steps listed\n")

    def test_fenced_response_persisted(self, store: TicketStore, project: Project) -> None:
        raw = "```json\n" + tickets_json(
            *[{"title": f"T{i}", "description": f"D{i}"} for i in range(3)]
        ) + "\n```"

        assert _service(store, _content(raw)).generate_for_project(project) == 3

    def test_rate_limited_persists_nothing(self, store: TicketStore, project: Project) -> None:
        def handler(_request: httpx.Request) -> httpx.Response:
            return httpx.Response(429, json={"error": {"message": "slow down"}})

        with pytest.raises(RateLimitedError):
            _service(store, handler).generate_for_project(project)

        assert store.count_tickets(project.id) == 0

    def test_broken_json_persists_nothing(self, store: TicketStore, project: Project) -> None:
        with pytest.raises(MalformedResponseError):
            _service(store, _content("not json {broken")).generate_for_project(project)

        assert store.count_tickets(project.id) == 0

    def test_store_failure_rolls_back_batch(
        self,
        store: TicketStore,
        project: Project,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """A failure on the second insert leaves no ticket from the batch."""
        original = TicketBatch.create_ticket
        calls: list[str] = []

        def failing_create(self: TicketBatch, project_id: int, name: str, *args, **kwargs):
            calls.append(name)
            if len(calls) == 2:
                raise RuntimeError("simulated write failure")
            return original(self, project_id, name, *args, **kwargs)

        monkeypatch.setattr(TicketBatch, "create_ticket", failing_create)
        raw = tickets_json(
            {"title": "First", "description": "Persisted before the failure"},
            {"title": "Second", "description": "Fails to persist"},
        )

        with pytest.raises(RuntimeError, match="simulated write failure"):
            _service(store, _content(raw)).generate_for_project(project)

        assert calls == ["First", "Second"]
        assert store.count_tickets(project.id) == 0

    def test_missing_backlog_status_rolls_back(self, store: TicketStore) -> None:
        """Without a backlog status every insert fails and nothing remains."""
        project = store.create_project("Unseeded")
        raw = tickets_json(*[{"title": f"T{i}", "description": f"D{i}"} for i in range(3)])

        with pytest.raises(IntegrityError):
            _service(store, _content(raw)).generate_for_project(project)

        assert store.count_tickets() == 0

    def test_existing_tickets_untouched_by_failed_batch(
        self, store: TicketStore, project: Project
    ) -> None:
        store.create_ticket(project.id, "Existing", "Already there")

        with pytest.raises(MalformedResponseError):
            _service(store, _content('{"tickets": []}')).generate_for_project(project)

        assert [t.name for t in store.list_tickets(project.id)] == ["Existing"]
