"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for identity and the task service. Routes depend
only on these, not on infrastructure directly. The store backend is chosen
by DATABASE_BACKEND when the lifespan builds it.
"""

from tasknest.api.v1.dependencies.auth import get_current_owner_id_optional
from tasknest.api.v1.dependencies.tasks import get_task_service, get_task_store

__all__ = [
    "get_current_owner_id_optional",
    "get_task_service",
    "get_task_store",
]
