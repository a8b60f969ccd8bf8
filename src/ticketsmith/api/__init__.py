"""REST API for ticketsmith."""

from ticketsmith.api.app import create_app
from ticketsmith.api.models import (
    APIResponse,
    GenerateTicketsRequest,
    GenerateTicketsResponse,
    ProjectCreate,
    ProjectResponse,
    TicketResponse,
)

__all__ = [
    "APIResponse",
    "GenerateTicketsRequest",
    "GenerateTicketsResponse",
    "ProjectCreate",
    "ProjectResponse",
    "TicketResponse",
    "create_app",
]
