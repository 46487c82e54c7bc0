"""Security: bearer tokens that identify the task owner."""

from tasknest.infrastructure.security.jwt import (
    create_access_token,
    decode_access_token,
    owner_id_from_token,
)

__all__ = [
    "create_access_token",
    "decode_access_token",
    "owner_id_from_token",
]
