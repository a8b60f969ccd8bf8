"""TicketGeneratorService - turns a project into a persisted batch of tickets."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from ticketsmith.ai import ResponseParser, build_prompt
from ticketsmith.ai.exceptions import GenerationError
from ticketsmith.generator.exceptions import EmptyTicketBatchError, InvalidTicketDataError
from ticketsmith.state_store import NameMatch

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ticketsmith.ai import GenerationClient, TicketDraft
    from ticketsmith.state_store import TicketBatch, TicketStore

logger = logging.getLogger("ticketsmith.generator")

ACCEPTANCE_CRITERIA_HEADING = "**Acceptance Criteria:**"


class ProjectContext(Protocol):
    """The project fields the generator reads."""

    id: int
    name: str
    description: str | None


class DraftParser(Protocol):
    def parse(self, raw: str) -> Sequence[TicketDraft]: ...


def render_description(draft: TicketDraft) -> str:
    """Ticket body with the acceptance criteria appended as a bullet list."""
    description = draft.description
    if draft.acceptance_criteria:
        description += f"\n\n{ACCEPTANCE_CRITERIA_HEADING}\n"
        description += "".join(f"- {criterion}\n" for criterion in draft.acceptance_criteria)
    return description


def validate_drafts(drafts: Sequence[TicketDraft]) -> list[TicketDraft]:
    """Check every draft has a title and description.

    Drafts may come from sources other than the response parser, so this does
    not rely on the parser's filtering.

    Raises:
        EmptyTicketBatchError: If there are no drafts.
        InvalidTicketDataError: Naming the first offending draft and field.
    """
    for index, draft in enumerate(drafts):
        if not (draft.title or "").strip():
            raise InvalidTicketDataError(index, "title")
        if not (draft.description or "").strip():
            raise InvalidTicketDataError(index, "description")

    if not drafts:
        raise EmptyTicketBatchError()

    return list(drafts)


class TicketGeneratorService:
    """Generates tickets for a project and stores them as one batch.

    One call makes exactly one provider request. Provider errors are passed
    through untouched; the service only raises for problems it detects itself.
    """

    def __init__(
        self,
        client: GenerationClient,
        store: TicketStore,
        parser: DraftParser | None = None,
        priority_match: NameMatch = NameMatch.EXACT,
    ) -> None:
        """Initialize the service.

        Args:
            client: Provider client used for the generation call.
            store: Ticket store receiving the batch.
            parser: Response parser. Defaults to ResponseParser().
            priority_match: Name comparison for the default priority lookup.
        """
        self.client = client
        self.store = store
        self.parser = parser if parser is not None else ResponseParser()
        self.priority_match = priority_match

    def generate_for_project(self, project: ProjectContext, prompt: str | None = None) -> int:
        """Generate tickets for a project and persist them atomically.

        Args:
            project: Project providing name, description and id.
            prompt: Optional extra instructions from the user.

        Returns:
            Number of tickets created.

        Raises:
            GenerationError: Provider call or response parsing failed.
            TicketGenerationError: Drafts failed validation.
            Exception: Any persistence error, after the batch is rolled back.
        """
        logger.info(
            "Starting ticket generation for project %s (%s, has_prompt=%s)",
            project.id,
            project.name,
            bool(prompt),
        )

        try:
            raw = self.client.generate(build_prompt(project.name, project.description, prompt))
            drafts = self.parser.parse(raw)
        except GenerationError as e:
            logger.error(
                "Ticket generation failed for project %s: %s (%s)",
                project.id,
                e.kind.value,
                e,
            )
            raise

        validated = validate_drafts(drafts)

        def create_all(batch: TicketBatch) -> int:
            for draft in validated:
                batch.create_ticket(
                    project.id,
                    draft.title,
                    render_description(draft),
                    priority_match=self.priority_match,
                )
            return len(batch.created)

        try:
            count = self.store.atomic(create_all)
        except Exception:
            logger.exception("Persisting generated tickets failed for project %s", project.id)
            raise

        logger.info("Created %d ticket(s) for project %s", count, project.id)
        return count
