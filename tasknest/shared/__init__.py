"""Shared utilities and cross-cutting helpers (time, ids, request context).

Used by domain-adjacent, application, and infrastructure code. No business logic.
"""

from tasknest.shared.context import get_request_id, reset_request_id, set_request_id
from tasknest.shared.utils import advance_timestamp, ensure_utc, generate_cuid, utc_now

__all__ = [
    "advance_timestamp",
    "ensure_utc",
    "generate_cuid",
    "get_request_id",
    "reset_request_id",
    "set_request_id",
    "utc_now",
]
