from __future__ import annotations

from typing import Any, TypeVar

from sqlalchemy.orm import Session

from app.core.errors import NotFound, Unauthenticated

ModelT = TypeVar("ModelT")


def require_user(user_id: Any) -> str:
    """Normalize the caller's owner id; no id means no caller."""
    if user_id is None:
        raise Unauthenticated()
    owner = str(user_id).strip()
    if not owner:
        raise Unauthenticated()
    return owner


def load_owned(
    db: Session,
    model: type[ModelT],
    record_id: Any,
    owner_id: str,
    *,
    label: str,
    options: tuple = (),
) -> ModelT:
    """
    Load-and-authorize: the row must match both id and owner.

    Missing rows and rows owned by someone else both raise NotFound with the
    same message.
    """
    try:
        key = int(record_id)
    except (TypeError, ValueError):
        raise NotFound(f"{label} not found")

    qry = db.query(model)
    if options:
        qry = qry.options(*options)
    row = qry.filter(model.id == key, model.owner_id == owner_id).first()
    if not row:
        raise NotFound(f"{label} not found")
    return row
