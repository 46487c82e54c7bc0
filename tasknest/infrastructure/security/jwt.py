"""Bearer tokens that carry the caller's owner id.

The identity provider signs an HS256 (by default) JWT whose sub claim is the
owner id every task operation is scoped to. create_access_token mints the
same shape of token for local development (scripts/issue_token.py) and tests.
"""

from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from tasknest.core.config import get_settings


def create_access_token(
    owner_id: str,
    *,
    expires_delta: timedelta | None = None,
    claims: dict[str, Any] | None = None,
) -> str:
    """Sign a token for owner_id.

    Args:
        owner_id: Written to the sub claim.
        expires_delta: Optional TTL; else settings.access_token_expire_minutes.
        claims: Extra claims to include (sub and exp are always set here).

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    ttl = (
        expires_delta
        if expires_delta is not None
        else timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode = {**(claims or {}), "sub": owner_id, "exp": datetime.now(UTC) + ttl}
    encoded = jwt.encode(
        to_encode,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def decode_access_token(token: str) -> dict[str, Any]:
    """Verify signature and expiry and return the claims.

    Raises:
        ValueError: If the token is malformed, badly signed, expired, or has
            no exp or no sub claim.
    """
    settings = get_settings()
    try:
        return jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e


def owner_id_from_token(token: str) -> str:
    """Owner id (sub claim) of a valid token.

    Raises:
        ValueError: If the token is invalid or its sub claim is empty.
    """
    owner_id = decode_access_token(token).get("sub")
    if not owner_id:
        raise ValueError("Token has an empty sub claim")
    return str(owner_id)
