"""Application interfaces (ports): store and service protocols.

Define contracts for infrastructure and client implementations (DIP).
No runtime imports from tasknest.infrastructure or tasknest.api.
"""

from tasknest.application.interfaces.repositories import ITaskStore
from tasknest.application.interfaces.services import (
    ITaskChangeListener,
    ITaskService,
)

__all__ = [
    "ITaskChangeListener",
    "ITaskService",
    "ITaskStore",
]
