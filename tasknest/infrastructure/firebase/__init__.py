"""Firestore integration (REST client and task store)."""

from tasknest.infrastructure.firebase.client import (
    create_firestore_client,
    load_service_account,
)

__all__ = [
    "create_firestore_client",
    "load_service_account",
]
