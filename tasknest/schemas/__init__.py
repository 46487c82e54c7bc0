"""Pydantic request/response schemas for the API."""

from tasknest.schemas.health import HealthResponse
from tasknest.schemas.task import (
    TaskCreateRequest,
    TaskResponse,
    TaskStatusUpdate,
    TaskUpdateRequest,
)

__all__ = [
    "HealthResponse",
    "TaskCreateRequest",
    "TaskResponse",
    "TaskStatusUpdate",
    "TaskUpdateRequest",
]
