"""TicketStore - persistence API for projects, workflow metadata and tickets."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from ticketsmith.state_store.database import Database
from ticketsmith.state_store.defaults import (
    DEFAULT_PRIORITY_NAME,
    DEFAULT_STATUS_NAME,
    NameMatch,
    WorkflowDefaults,
    resolve_workflow_defaults,
)
from ticketsmith.state_store.exceptions import (
    PriorityExistsError,
    ProjectNotFoundError,
    StatusExistsError,
    TicketNotFoundError,
)
from ticketsmith.state_store.models import Project, Ticket, TicketPriority, TicketStatus

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.orm import Session
    from sqlalchemy.sql import Select

logger = logging.getLogger("ticketsmith.state_store")

T = TypeVar("T")


def _status_stmt(project_id: int, name: str, match: NameMatch) -> Select[tuple[TicketStatus]]:
    stmt = select(TicketStatus).where(TicketStatus.project_id == project_id)
    if match is NameMatch.IGNORE_CASE:
        return stmt.where(func.lower(TicketStatus.name) == name.lower())
    return stmt.where(TicketStatus.name == name)


def _priority_stmt(name: str, match: NameMatch) -> Select[tuple[TicketPriority]]:
    if match is NameMatch.IGNORE_CASE:
        return select(TicketPriority).where(func.lower(TicketPriority.name) == name.lower())
    return select(TicketPriority).where(TicketPriority.name == name)


class TicketBatch:
    """Unit of work handed to :meth:`TicketStore.atomic`.

    Every operation runs in the caller's transaction; nothing is visible to
    other sessions until the work function returns.
    """

    def __init__(self, session: Session) -> None:
        self._session = session
        self.created: list[Ticket] = []

    def find_status_by_name(
        self, project_id: int, name: str, match: NameMatch = NameMatch.EXACT
    ) -> TicketStatus | None:
        return self._session.execute(_status_stmt(project_id, name, match)).scalars().first()

    def find_priority_by_name(
        self, name: str, match: NameMatch = NameMatch.EXACT
    ) -> TicketPriority | None:
        return self._session.execute(_priority_stmt(name, match)).scalars().first()

    def create_ticket(
        self,
        project_id: int,
        name: str,
        description: str,
        status_id: int | None = None,
        priority_id: int | None = None,
        priority_match: NameMatch = NameMatch.EXACT,
    ) -> Ticket:
        """Insert a ticket, filling in default status and priority.

        Raises:
            sqlalchemy.exc.IntegrityError: If no status could be resolved.
        """
        defaults = resolve_workflow_defaults(
            self,
            project_id,
            status_id=status_id,
            priority_id=priority_id,
            match=priority_match,
        )
        ticket = Ticket(
            project_id=project_id,
            name=name,
            description=description,
            ticket_status_id=defaults.status_id,
            priority_id=defaults.priority_id,
        )
        self._session.add(ticket)
        self._session.flush()
        self._session.refresh(ticket)
        self.created.append(ticket)
        return ticket


class TicketStore:
    """Main API for ticket store operations.

    Each method opens its own session. Multi-row writes that must succeed or
    fail together go through :meth:`atomic`.
    """

    def __init__(self, db_path: str = "ticketsmith.db") -> None:
        """Open the store, creating tables if needed.

        Args:
            db_path: Path to SQLite database file
        """
        self._db = Database(db_path)
        self._db.create_tables()

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    def atomic(self, work: Callable[[TicketBatch], T]) -> T:
        """Run work in a single transaction.

        Commits when work returns; rolls back and re-raises if it raises, so a
        failed batch leaves no rows behind.

        Args:
            work: Callable receiving the TicketBatch for this transaction.

        Returns:
            Whatever work returns.
        """
        try:
            with self._db.transaction() as session:
                return work(TicketBatch(session))
        except Exception:
            logger.warning("Transaction rolled back")
            raise

    # --- Project Operations ---

    def create_project(self, name: str, description: str | None = None) -> Project:
        with self._db.transaction() as session:
            project = Project(name=name, description=description)
            session.add(project)
            session.flush()
            session.refresh(project)
        logger.info("Created project %s (%s)", project.id, project.name)
        return project

    def get_project(self, project_id: int) -> Project:
        """Get project by ID.

        Raises:
            ProjectNotFoundError: If project doesn't exist
        """
        with self._db.session() as session:
            project = session.get(Project, project_id)
            if project is None:
                raise ProjectNotFoundError(f"Project with id '{project_id}' not found")
            return project

    def list_projects(self) -> list[Project]:
        """List all projects ordered by name."""
        with self._db.session() as session:
            return list(session.execute(select(Project).order_by(Project.name)).scalars())

    def delete_project(self, project_id: int) -> None:
        """Delete a project with its statuses and tickets.

        Raises:
            ProjectNotFoundError: If project doesn't exist
        """
        with self._db.transaction() as session:
            project = session.get(Project, project_id)
            if project is None:
                raise ProjectNotFoundError(f"Project with id '{project_id}' not found")
            session.delete(project)
        logger.info("Deleted project %s", project_id)

    # --- Workflow Metadata ---

    def create_status(
        self,
        project_id: int,
        name: str,
        sort_order: int = 0,
        color: str | None = None,
        is_completed: bool = False,
    ) -> TicketStatus:
        """Create a workflow status for a project.

        Raises:
            ProjectNotFoundError: If project doesn't exist
            StatusExistsError: If the project already has a status with this name
        """
        try:
            with self._db.transaction() as session:
                if session.get(Project, project_id) is None:
                    raise ProjectNotFoundError(f"Project with id '{project_id}' not found")
                status = TicketStatus(
                    project_id=project_id,
                    name=name,
                    sort_order=sort_order,
                    color=color,
                    is_completed=is_completed,
                )
                session.add(status)
                session.flush()
        except IntegrityError as e:
            raise StatusExistsError(
                f"Status '{name}' already exists in project '{project_id}'"
            ) from e
        return status

    def find_status_by_name(
        self, project_id: int, name: str, match: NameMatch = NameMatch.EXACT
    ) -> TicketStatus | None:
        with self._db.session() as session:
            return session.execute(_status_stmt(project_id, name, match)).scalars().first()

    def list_statuses(self, project_id: int) -> list[TicketStatus]:
        """List a project's statuses by sort order."""
        stmt = (
            select(TicketStatus)
            .where(TicketStatus.project_id == project_id)
            .order_by(TicketStatus.sort_order, TicketStatus.id)
        )
        with self._db.session() as session:
            return list(session.execute(stmt).scalars())

    def create_priority(self, name: str, color: str | None = None) -> TicketPriority:
        """Create a global priority.

        Raises:
            PriorityExistsError: If a priority with this name exists
        """
        try:
            with self._db.transaction() as session:
                priority = TicketPriority(name=name, color=color)
                session.add(priority)
                session.flush()
        except IntegrityError as e:
            raise PriorityExistsError(f"Priority '{name}' already exists") from e
        return priority

    def find_priority_by_name(
        self, name: str, match: NameMatch = NameMatch.EXACT
    ) -> TicketPriority | None:
        with self._db.session() as session:
            return session.execute(_priority_stmt(name, match)).scalars().first()

    def list_priorities(self) -> list[TicketPriority]:
        with self._db.session() as session:
            return list(session.execute(select(TicketPriority).order_by(TicketPriority.id)).scalars())

    def seed_defaults(self, project_id: int) -> WorkflowDefaults:
        """Ensure the project's backlog status and the medium priority exist.

        Returns:
            Ids of the (possibly pre-existing) default status and priority.

        Raises:
            ProjectNotFoundError: If project doesn't exist
        """
        with self._db.transaction() as session:
            if session.get(Project, project_id) is None:
                raise ProjectNotFoundError(f"Project with id '{project_id}' not found")

            status = session.execute(
                _status_stmt(project_id, DEFAULT_STATUS_NAME, NameMatch.EXACT)
            ).scalar_one_or_none()
            if status is None:
                status = TicketStatus(project_id=project_id, name=DEFAULT_STATUS_NAME)
                session.add(status)

            priority = session.execute(
                _priority_stmt(DEFAULT_PRIORITY_NAME, NameMatch.EXACT)
            ).scalar_one_or_none()
            if priority is None:
                priority = TicketPriority(name=DEFAULT_PRIORITY_NAME)
                session.add(priority)

            session.flush()
            return WorkflowDefaults(status_id=status.id, priority_id=priority.id)

    # --- Ticket Operations ---

    def create_ticket(
        self,
        project_id: int,
        name: str,
        description: str,
        status_id: int | None = None,
        priority_id: int | None = None,
        priority_match: NameMatch = NameMatch.EXACT,
    ) -> Ticket:
        """Create one ticket with default status and priority resolution.

        Raises:
            sqlalchemy.exc.IntegrityError: If no status could be resolved
        """
        return self.atomic(
            lambda batch: batch.create_ticket(
                project_id,
                name,
                description,
                status_id=status_id,
                priority_id=priority_id,
                priority_match=priority_match,
            )
        )

    def get_ticket(self, ticket_id: int) -> Ticket:
        """Get ticket by ID.

        Raises:
            TicketNotFoundError: If ticket doesn't exist
        """
        with self._db.session() as session:
            ticket = session.get(Ticket, ticket_id)
            if ticket is None:
                raise TicketNotFoundError(f"Ticket with id '{ticket_id}' not found")
            return ticket

    def list_tickets(self, project_id: int) -> list[Ticket]:
        """List a project's tickets in creation order."""
        stmt = select(Ticket).where(Ticket.project_id == project_id).order_by(Ticket.id)
        with self._db.session() as session:
            return list(session.execute(stmt).unique().scalars())

    def count_tickets(self, project_id: int | None = None) -> int:
        """Count tickets, optionally for one project."""
        stmt = select(func.count(Ticket.id))
        if project_id is not None:
            stmt = stmt.where(Ticket.project_id == project_id)
        with self._db.session() as session:
            return int(session.execute(stmt).scalar_one())
