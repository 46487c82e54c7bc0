"""Application lifespan: startup and shutdown.

Single place for startup/shutdown logic. Used by main.py; no business
logic here, only wiring of the task store.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from tasknest.core.config import get_settings
from tasknest.domain.exceptions import StoreUnavailableException
from tasknest.infrastructure.factory import create_task_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: build the configured task store (unless one was injected on
    app.state, e.g. by tests) and connect it. Shutdown: close the store.
    """
    settings = get_settings()

    # ---- Startup ----
    store = getattr(app.state, "task_store", None)
    if store is None:
        store = create_task_store(settings)
        app.state.task_store = store
    try:
        await store.connect()
        logger.info("Task store ready backend=%s", settings.database_backend)
    except StoreUnavailableException:
        # Requests retry the connection and answer 503 until it succeeds.
        logger.warning(
            "Task store not reachable at startup backend=%s", settings.database_backend
        )

    yield

    # ---- Shutdown ----
    await store.close()
    logger.info("Task store closed")
