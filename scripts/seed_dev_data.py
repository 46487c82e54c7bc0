"""Seed a few tasks for an owner through TaskService (any backend).

Usage:
    python -m scripts.seed_dev_data <owner_id>
Uses DATABASE_BACKEND and its credentials from the environment / .env.
With the memory backend the data only lives for this process, so this is
mainly useful against firestore or postgres.
"""

import asyncio
import sys

from tasknest.application.use_cases.tasks import TaskService
from tasknest.core.config import get_settings
from tasknest.domain.exceptions import TaskNestException
from tasknest.infrastructure.factory import create_task_store
from tasknest.shared.logging import setup_logging

SAMPLE_TASKS = [
    {"title": "Plan the week", "priority": "high", "labels": ["planning"]},
    {
        "title": "Review pull requests",
        "status": "in-progress",
        "labels": "work, review",
    },
    {"title": "Renew passport", "due_date": "2026-12-01", "priority": "low"},
    {"title": "Water the plants", "status": "completed"},
]


async def main() -> None:
    """Create SAMPLE_TASKS for the owner id given on the command line."""
    if len(sys.argv) < 2:
        print("Usage: python -m scripts.seed_dev_data <owner_id>", file=sys.stderr)
        sys.exit(1)
    owner_id = sys.argv[1]

    settings = get_settings()
    setup_logging()
    store = create_task_store(settings)
    service = TaskService(store)
    try:
        for payload in SAMPLE_TASKS:
            task = await service.create_task(owner_id, payload)
            print(f"Created task {task.id}: {task.title} [{task.status.value}]")
    except TaskNestException as e:
        print(f"Seeding failed: {e.message} {e.details}", file=sys.stderr)
        sys.exit(1)
    finally:
        await store.close()


if __name__ == "__main__":
    asyncio.run(main())
