"""Task ORM model. One row per personal task."""

from datetime import date

from sqlalchemy import JSON, Date, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tasknest.infrastructure.persistence.database import Base
from tasknest.infrastructure.persistence.models.mixins import (
    CuidMixin,
    OwnerMixin,
    TimestampMixin,
)


class Task(CuidMixin, OwnerMixin, TimestampMixin, Base):
    """Task owned by a single user. Table: task."""

    __tablename__ = "task"

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default="todo", server_default="todo"
    )
    priority: Mapped[str] = mapped_column(
        String(16), nullable=False, default="medium", server_default="medium"
    )
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    labels: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    __table_args__ = (
        Index("ix_task_owner_status", "owner_id", "status"),
        Index("ix_task_owner_created", "owner_id", "created_at"),
    )
