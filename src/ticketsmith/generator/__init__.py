"""Ticket generator - validates AI drafts and persists them as one batch."""

from ticketsmith.generator.exceptions import (
    EmptyTicketBatchError,
    InvalidTicketDataError,
    TicketGenerationError,
    TicketGenerationErrorKind,
)
from ticketsmith.generator.service import (
    ACCEPTANCE_CRITERIA_HEADING,
    TicketGeneratorService,
    render_description,
    validate_drafts,
)

__all__ = [
    "ACCEPTANCE_CRITERIA_HEADING",
    "EmptyTicketBatchError",
    "InvalidTicketDataError",
    "TicketGenerationError",
    "TicketGenerationErrorKind",
    "TicketGeneratorService",
    "render_description",
    "validate_drafts",
]
