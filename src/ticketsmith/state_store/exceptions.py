"""Custom exceptions for the ticket store."""


class StoreError(Exception):
    """Base exception for ticket store errors."""


class ProjectNotFoundError(StoreError):
    """Project with given ID does not exist."""


class TicketNotFoundError(StoreError):
    """Ticket with given ID does not exist."""


class StatusExistsError(StoreError):
    """Status with this name already exists in the project."""


class PriorityExistsError(StoreError):
    """Priority with this name already exists."""
