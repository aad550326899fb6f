# app/core/errors.py
"""
Domain error taxonomy shared by the services and the HTTP layer.

Services raise these; app.main renders them in the standard error shape
({"error": CODE, "message": str, "details"?: dict}).
"""
from __future__ import annotations

from typing import Any


class ServiceError(Exception):
    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class Unauthenticated(ServiceError):
    """No resolvable caller identity."""

    status_code = 401
    code = "UNAUTHORIZED"
    default_message = "Authentication required"


class ValidationError(ServiceError):
    """Missing or invalid field; raised before any write reaches the store."""

    status_code = 400
    code = "VALIDATION_ERROR"
    default_message = "Invalid request"


class NotFound(ServiceError):
    """
    Record absent OR owned by someone else. The two cases are deliberately
    indistinguishable to the caller.
    """

    status_code = 404
    code = "NOT_FOUND"
    default_message = "Not found"


class Conflict(ServiceError):
    status_code = 409
    code = "CONFLICT"
    default_message = "Conflict"


class StoreUnavailable(ServiceError):
    """The record store could not be reached or failed unexpectedly."""

    status_code = 503
    code = "STORE_UNAVAILABLE"
    default_message = "Record store unavailable"
