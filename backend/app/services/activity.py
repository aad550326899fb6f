from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session

from app.core.database import store_errors
from app.models.application import Application
from app.models.application_activity import ApplicationActivity
from app.services.ownership import load_owned, require_user


def log_application_activity(
    db: Session,
    *,
    application_id: int,
    owner_id: str,
    type: str,
    message: Optional[str] = None,
    data: Optional[Dict[str, Any]] = None,
) -> ApplicationActivity:
    ev = ApplicationActivity(
        application_id=application_id,
        owner_id=owner_id,
        type=type,
        message=message,
        data=data,
    )
    db.add(ev)
    # Let caller decide commit timing; flush so `id`/`created_at` can be used.
    db.flush()
    return ev


def list_activity(db: Session, user_id: str | None, application_id: int, limit: int = 50) -> list[ApplicationActivity]:
    owner = require_user(user_id)
    limit2 = max(1, min(int(limit or 50), 200))
    with store_errors(db, "list activity"):
        load_owned(db, Application, application_id, owner, label="Application")
        return (
            db.query(ApplicationActivity)
            .filter(
                ApplicationActivity.application_id == application_id,
                ApplicationActivity.owner_id == owner,
            )
            .order_by(desc(ApplicationActivity.created_at), desc(ApplicationActivity.id))
            .limit(limit2)
            .all()
        )
