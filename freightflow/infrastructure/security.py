"""JWT helpers used to identify the caller of the API."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from jose import JWTError, jwt

from freightflow.config import get_settings
from freightflow.utils import now_utc


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """Sign ``data`` into a bearer token; ``sub`` must hold the user id."""

    settings = get_settings()
    expire = now_utc() + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    claims = {**data, "exp": expire}
    if "sub" in claims:
        claims["sub"] = str(claims["sub"])
    return jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


__all__ = ["create_access_token", "decode_access_token"]
