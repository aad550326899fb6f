# app/dependencies/auth.py
from __future__ import annotations

import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from app.auth.identity import Identity
from app.core.errors import Unauthenticated
from app.core.security import decode_access_token

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_identity(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Identity:
    """
    Validates:
      - Authorization: Bearer <token>
      - token signature + exp (+ aud when configured)
      - non-empty ``sub`` claim
    Returns:
      - authenticated Identity whose user_id is the owner id
    """
    if not creds or creds.scheme.lower() != "bearer":
        raise Unauthenticated("Missing Authorization header")

    try:
        claims = decode_access_token(creds.credentials)
    except JWTError as exc:
        logger.warning("Rejected access token: %s", exc)
        raise Unauthenticated("Invalid or expired token")

    identity = Identity.from_claims(claims)
    if not identity.is_authenticated:
        logger.warning("Rejected access token without subject: %s", identity.to_debug_dict())
        raise Unauthenticated("Invalid or expired token")

    return identity
