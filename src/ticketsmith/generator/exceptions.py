"""Exceptions for the ticket generator service."""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar


class TicketGenerationErrorKind(StrEnum):
    """Validation failures detected by the generator itself."""

    MALFORMED_RESPONSE = "malformed_response"
    INVALID_TICKET_DATA = "invalid_ticket_data"


class TicketGenerationError(Exception):
    """Base exception for ticket generator errors."""

    kind: ClassVar[TicketGenerationErrorKind]


class EmptyTicketBatchError(TicketGenerationError):
    """The generated draft list is empty."""

    kind = TicketGenerationErrorKind.MALFORMED_RESPONSE

    def __init__(self) -> None:
        super().__init__("malformed response: no tickets to create")


class InvalidTicketDataError(TicketGenerationError):
    """A draft is missing a required field.

    Attributes:
        index: Zero-based position of the draft in the batch.
        field: Name of the missing field ("title" or "description").
    """

    kind = TicketGenerationErrorKind.INVALID_TICKET_DATA

    def __init__(self, index: int, field: str) -> None:
        self.index = index
        self.field = field
        super().__init__(f"Ticket #{index} is missing a {field}")
