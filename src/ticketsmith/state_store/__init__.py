"""Ticket store - persistence for projects, workflow metadata and tickets."""

from ticketsmith.state_store.defaults import (
    DEFAULT_PRIORITY_NAME,
    DEFAULT_STATUS_NAME,
    NameMatch,
    WorkflowDefaults,
    WorkflowLookups,
    resolve_workflow_defaults,
)
from ticketsmith.state_store.exceptions import (
    PriorityExistsError,
    ProjectNotFoundError,
    StatusExistsError,
    StoreError,
    TicketNotFoundError,
)
from ticketsmith.state_store.models import Project, Ticket, TicketPriority, TicketStatus
from ticketsmith.state_store.store import TicketBatch, TicketStore

__all__ = [
    "DEFAULT_PRIORITY_NAME",
    "DEFAULT_STATUS_NAME",
    "NameMatch",
    "PriorityExistsError",
    "Project",
    "ProjectNotFoundError",
    "StatusExistsError",
    "StoreError",
    "Ticket",
    "TicketBatch",
    "TicketNotFoundError",
    "TicketPriority",
    "TicketStatus",
    "TicketStore",
    "WorkflowDefaults",
    "WorkflowLookups",
    "resolve_workflow_defaults",
]
