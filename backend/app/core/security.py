# app/core/security.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import jwt

from app.core.config import settings


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _require_jwt_secret() -> None:
    if not settings.JWT_SECRET or not settings.JWT_SECRET.strip():
        raise RuntimeError("JWT_SECRET must be set (auth is required).")


# -------------------------
# JWT helpers
# -------------------------
def create_access_token(
    subject: str,
    *,
    email: str | None = None,
    expires_minutes: int | None = None,
) -> str:
    """
    Mint a token in the identity provider's format (sub = owner id).

    Production tokens are issued by the hosted provider; this is used by
    tests and local tooling that share JWT_SECRET with it.
    """
    _require_jwt_secret()

    now = _now_utc()
    minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES if expires_minutes is None else expires_minutes
    exp = now + timedelta(minutes=minutes)

    payload: dict[str, Any] = {
        "sub": subject,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    if email:
        payload["email"] = email
    if settings.JWT_AUDIENCE:
        payload["aud"] = settings.JWT_AUDIENCE

    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Returns the verified claims or raises JWTError (signature, exp, aud).
    Keep this "pure": callers decide how to report failures.
    """
    _require_jwt_secret()
    audience = settings.JWT_AUDIENCE or None
    return jwt.decode(
        token,
        settings.JWT_SECRET,
        algorithms=[settings.JWT_ALGORITHM],
        audience=audience,
        options={"verify_aud": audience is not None},
    )
