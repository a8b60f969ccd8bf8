"""Default workflow metadata for newly created tickets."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ticketsmith.state_store.models import TicketPriority, TicketStatus

DEFAULT_STATUS_NAME = "backlog"
DEFAULT_PRIORITY_NAME = "medium"


class NameMatch(StrEnum):
    """How status and priority names are compared during lookups."""

    EXACT = "exact"
    IGNORE_CASE = "ignore_case"


class WorkflowLookups(Protocol):
    """Read access needed to resolve defaults."""

    def find_status_by_name(
        self, project_id: int, name: str, match: NameMatch = NameMatch.EXACT
    ) -> TicketStatus | None: ...

    def find_priority_by_name(
        self, name: str, match: NameMatch = NameMatch.EXACT
    ) -> TicketPriority | None: ...


@dataclass(frozen=True)
class WorkflowDefaults:
    """Resolved status and priority ids; None means left unset."""

    status_id: int | None = None
    priority_id: int | None = None


def resolve_workflow_defaults(
    lookups: WorkflowLookups,
    project_id: int | None,
    status_id: int | None = None,
    priority_id: int | None = None,
    match: NameMatch = NameMatch.EXACT,
) -> WorkflowDefaults:
    """Fill in missing status and priority ids.

    An explicit id always wins. Otherwise the status falls back to the
    project's "backlog" status and the priority to the global "medium"
    priority. Missing defaults are left unset rather than raising.

    Args:
        lookups: Store read access (a TicketStore or an open TicketBatch).
        project_id: Project the ticket belongs to, if known.
        status_id: Explicit status id.
        priority_id: Explicit priority id.
        match: Name comparison used for the priority lookup.

    Returns:
        The resolved ids.
    """
    if status_id is None and project_id is not None:
        status = lookups.find_status_by_name(project_id, DEFAULT_STATUS_NAME)
        if status is not None:
            status_id = status.id

    if priority_id is None:
        priority = lookups.find_priority_by_name(DEFAULT_PRIORITY_NAME, match)
        if priority is not None:
            priority_id = priority.id

    return WorkflowDefaults(status_id=status_id, priority_id=priority_id)
