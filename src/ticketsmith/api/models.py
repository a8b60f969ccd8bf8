"""Pydantic models for the REST API."""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


# Project models


class ProjectCreate(BaseModel):
    """Request model for creating a project."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    seed_defaults: bool = Field(
        default=True,
        description="Create the 'backlog' status and 'medium' priority if missing",
    )


class ProjectResponse(BaseModel):
    """Response model for a project."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    created_at: datetime
    updated_at: datetime


# Workflow metadata models


class StatusCreate(BaseModel):
    """Request model for creating a ticket status."""

    name: str = Field(..., min_length=1, max_length=100)
    sort_order: int = 0
    color: str | None = Field(default=None, max_length=20)
    is_completed: bool = False


class StatusResponse(BaseModel):
    """Response model for a ticket status."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    name: str
    sort_order: int
    color: str | None
    is_completed: bool


class PriorityCreate(BaseModel):
    """Request model for creating a ticket priority."""

    name: str = Field(..., min_length=1, max_length=100)
    color: str | None = Field(default=None, max_length=20)


class PriorityResponse(BaseModel):
    """Response model for a ticket priority."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    color: str | None


# Ticket models


class TicketResponse(BaseModel):
    """Response model for a ticket."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    name: str
    description: str
    ticket_status_id: int
    priority_id: int | None
    created_at: datetime


class GenerateTicketsRequest(BaseModel):
    """Request model for AI ticket generation."""

    prompt: str | None = Field(default=None, max_length=5000)


class GenerateTicketsResponse(BaseModel):
    """Response model for AI ticket generation."""

    created: int
