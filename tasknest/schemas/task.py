"""Task API schemas.

Request models keep status, priority and due_date as plain strings: the
domain validator parses them so invalid values come back as a 400 naming
the field, the same error the in-process service raises.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from tasknest.domain.enums import TaskPriority, TaskStatus


class TaskCreateRequest(BaseModel):
    """Request body for creating a task."""

    title: str | None = Field(default=None, max_length=500)
    description: str | None = None
    status: str | None = Field(default=None, description="todo, in-progress or completed")
    priority: str | None = Field(default=None, description="low, medium or high")
    due_date: str | None = Field(default=None, description="YYYY-MM-DD")
    labels: list[str] | str | None = Field(
        default=None, description="List of labels or a comma-separated string"
    )


class TaskUpdateRequest(BaseModel):
    """Request body for updating a task (partial; only sent fields change)."""

    title: str | None = Field(default=None, max_length=500)
    description: str | None = None
    status: str | None = None
    priority: str | None = None
    due_date: str | None = None
    labels: list[str] | str | None = None


class TaskStatusUpdate(BaseModel):
    """Request body for PUT /tasks/{id}/status."""

    status: str = Field(..., description="todo, in-progress or completed")


class TaskResponse(BaseModel):
    """Task as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_id: str
    title: str
    description: str | None = None
    status: TaskStatus
    priority: TaskPriority
    due_date: date | None = None
    labels: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
