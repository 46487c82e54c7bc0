"""Identity dependencies: resolve the bearer token to an owner id."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from tasknest.infrastructure.security.jwt import owner_id_from_token

logger = logging.getLogger(__name__)

# auto_error=False: a missing token is an unresolved identity, which the
# service reports as AuthenticationException (401) like any other caller.
security = HTTPBearer(auto_error=False)


async def get_current_owner_id_optional(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> str | None:
    """Return the token's sub claim, or None when absent or invalid."""
    if credentials is None:
        return None
    try:
        return owner_id_from_token(credentials.credentials)
    except ValueError as e:
        logger.info("Rejected bearer token: %s", e)
        return None
