"""Data models for the AI generation layer."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TicketDraft:
    """A provider-proposed ticket before persistence.

    Attributes:
        title: Ticket title, trimmed.
        description: Ticket body, trimmed.
        acceptance_criteria: Ordered testable conditions, possibly empty.
    """

    title: str
    description: str
    acceptance_criteria: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class TicketCountPolicy:
    """Expected number of tickets per response.

    Counts outside the range only produce a warning.
    """

    minimum: int = 3
    maximum: int = 5

    def accepts(self, count: int) -> bool:
        return self.minimum <= count <= self.maximum
