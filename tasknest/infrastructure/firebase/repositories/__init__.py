"""Firestore-backed store implementations (swappable with memory and Postgres)."""

from tasknest.infrastructure.firebase.repositories.task_repo_firestore import (
    FirestoreTaskStore,
)

__all__ = [
    "FirestoreTaskStore",
]
