"""Firestore collection names (schema-in-code).

Firestore has no DDL or migrations. Collections are created automatically
when the first document is written. The task queries (owner_id equality,
optional status equality, created_at descending) need a composite index on
(owner_id, status, created_at desc) and (owner_id, created_at desc).
"""

COLLECTION_TASKS = "tasks"
