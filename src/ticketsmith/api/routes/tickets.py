"""Ticket listing, lookup and AI generation endpoints."""

from fastapi import APIRouter, status

from ticketsmith.api.dependencies import GeneratorDep, ProjectDep, StoreDep
from ticketsmith.api.models import (
    APIResponse,
    GenerateTicketsRequest,
    GenerateTicketsResponse,
    TicketResponse,
)

router = APIRouter(prefix="/projects/{project_id}/tickets", tags=["tickets"])

# Tickets addressed by their own id, outside a project path
ticket_router = APIRouter(prefix="/tickets", tags=["tickets"])


@router.get("", response_model=APIResponse[list[TicketResponse]])
def list_tickets(project: ProjectDep, store: StoreDep) -> APIResponse[list[TicketResponse]]:
    """List a project's tickets in creation order."""
    tickets = store.list_tickets(project.id)
    return APIResponse(data=[TicketResponse.model_validate(t) for t in tickets])


@router.post(
    "/generate",
    response_model=APIResponse[GenerateTicketsResponse],
    status_code=status.HTTP_201_CREATED,
)
def generate_tickets(
    project: ProjectDep,
    body: GenerateTicketsRequest,
    generator: GeneratorDep,
) -> APIResponse[GenerateTicketsResponse]:
    """Generate tickets for a project with the AI provider.

    The project is resolved before the generator, so an unknown project is a
    404 even when the provider is not configured.
    """
    created = generator.generate_for_project(project, body.prompt)
    return APIResponse(data=GenerateTicketsResponse(created=created))


@ticket_router.get("/{ticket_id}", response_model=APIResponse[TicketResponse])
def get_ticket(ticket_id: int, store: StoreDep) -> APIResponse[TicketResponse]:
    """Get a single ticket by id."""
    ticket = store.get_ticket(ticket_id)
    return APIResponse(data=TicketResponse.model_validate(ticket))
