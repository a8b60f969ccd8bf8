"""SQLAlchemy models for the ticket store."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003 - used at runtime for SQLAlchemy
from typing import Any

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    mapped_column,
    relationship,
)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class Project(Base):
    """Project model - the context tickets are generated for."""

    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    statuses: Mapped[list[TicketStatus]] = relationship(
        "TicketStatus", back_populates="project", cascade="all, delete-orphan"
    )
    tickets: Mapped[list[Ticket]] = relationship(
        "Ticket", back_populates="project", cascade="all, delete-orphan"
    )

    def __init__(self, name: str, description: str | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.name = name
        self.description = description

    def __repr__(self) -> str:
        return f"<Project(id={self.id!r}, name={self.name!r})>"


class TicketStatus(Base):
    """Workflow status, scoped to one project."""

    __tablename__ = "ticket_statuses"
    __table_args__ = (UniqueConstraint("project_id", "name", name="uq_status_project_name"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    color: Mapped[str | None] = mapped_column(String(20), nullable=True)
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    project: Mapped[Project] = relationship("Project", back_populates="statuses")

    def __repr__(self) -> str:
        return f"<TicketStatus(id={self.id!r}, project_id={self.project_id!r}, name={self.name!r})>"


class TicketPriority(Base):
    """Priority level, shared by all projects."""

    __tablename__ = "ticket_priorities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    color: Mapped[str | None] = mapped_column(String(20), nullable=True)

    def __repr__(self) -> str:
        return f"<TicketPriority(id={self.id!r}, name={self.name!r})>"


class Ticket(Base):
    """Ticket model - a persisted work item."""

    __tablename__ = "tickets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    ticket_status_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("ticket_statuses.id"), nullable=False
    )
    priority_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("ticket_priorities.id"), nullable=True
    )
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    project: Mapped[Project] = relationship("Project", back_populates="tickets")
    status: Mapped[TicketStatus] = relationship("TicketStatus", lazy="joined")
    priority: Mapped[TicketPriority | None] = relationship("TicketPriority", lazy="joined")

    def __init__(
        self,
        project_id: int,
        name: str,
        description: str,
        ticket_status_id: int | None = None,
        priority_id: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.project_id = project_id
        self.name = name
        self.description = description
        # None is kept as-is; the NOT NULL column rejects it at flush time
        self.ticket_status_id = ticket_status_id  # type: ignore[assignment]
        self.priority_id = priority_id

    def __repr__(self) -> str:
        return f"<Ticket(id={self.id!r}, project_id={self.project_id!r}, name={self.name!r})>"
