# app/auth/identity.py
"""
Canonical authenticated identity model.

Downstream code reasons about "who is this caller?" through an Identity
instead of inspecting raw JWT payloads. ``user_id`` is the owner id stamped
on every company and application row.

The Identity object is INTERNAL ONLY and should not be returned directly
to clients.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Identity:
    """
    Attributes:
        user_id: Identity-provider subject (``sub`` claim). Used as owner id.
        email: User's email address if the token carries one.
        is_authenticated: True if the token was verified.
        raw_claims: Verified token claims, for debugging/audit only.
                    Should NOT be used for authorization decisions.
    """

    user_id: str | None = None
    email: str | None = None
    is_authenticated: bool = False
    raw_claims: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def unauthenticated(cls) -> Identity:
        return cls(user_id=None, email=None, is_authenticated=False, raw_claims={})

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> Identity:
        """
        Build an identity from verified token claims.

        Returns an unauthenticated identity when ``sub`` is missing or blank.
        """
        sub = str(claims.get("sub") or "").strip()
        if not sub:
            return cls.unauthenticated()

        email = claims.get("email")
        return cls(
            user_id=sub,
            email=email.strip().lower() if isinstance(email, str) and email.strip() else None,
            is_authenticated=True,
            raw_claims=dict(claims),
        )

    def to_debug_dict(self) -> dict[str, Any]:
        """Safe subset for logs; never includes raw_claims."""
        return {
            "user_id": self.user_id,
            "email": self.email,
            "is_authenticated": self.is_authenticated,
        }
