"""Shared utilities: datetime and id generators."""

from tasknest.shared.utils.datetime import advance_timestamp, ensure_utc, utc_now
from tasknest.shared.utils.generators import generate_cuid

__all__ = [
    "advance_timestamp",
    "ensure_utc",
    "generate_cuid",
    "utc_now",
]
