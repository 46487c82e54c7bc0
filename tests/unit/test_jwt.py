"""Bearer token issue and verification."""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from tasknest.core.config import get_settings
from tasknest.infrastructure.security.jwt import (
    create_access_token,
    decode_access_token,
    owner_id_from_token,
)


@pytest.fixture(autouse=True)
def fresh_settings() -> None:
    get_settings.cache_clear()


def _sign(claims: dict, key: str | None = None) -> str:
    settings = get_settings()
    return jwt.encode(
        claims,
        key or settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )


def test_round_trip_keeps_owner_id_and_extra_claims() -> None:
    token = create_access_token("user-alice", claims={"name": "Alice", "sub": "ignored"})
    claims = decode_access_token(token)
    assert claims["sub"] == "user-alice"
    assert claims["name"] == "Alice"
    assert "exp" in claims
    assert owner_id_from_token(token) == "user-alice"


def test_expired_token_is_rejected() -> None:
    token = create_access_token("user-alice", expires_delta=timedelta(seconds=-5))
    with pytest.raises(ValueError, match="Invalid token"):
        owner_id_from_token(token)


def test_token_without_sub_is_rejected() -> None:
    exp = datetime.now(UTC) + timedelta(minutes=5)
    with pytest.raises(ValueError):
        owner_id_from_token(_sign({"role": "viewer", "exp": exp}))
    with pytest.raises(ValueError):
        owner_id_from_token(_sign({"sub": "", "exp": exp}))


def test_token_without_exp_is_rejected() -> None:
    with pytest.raises(ValueError, match="Invalid token"):
        decode_access_token(_sign({"sub": "user-alice"}))


def test_token_signed_with_other_key_is_rejected() -> None:
    exp = datetime.now(UTC) + timedelta(minutes=5)
    token = _sign({"sub": "user-alice", "exp": exp}, key="another-key")
    with pytest.raises(ValueError, match="Invalid token"):
        decode_access_token(token)
