"""
Application repository.

Every operation takes the caller's owner id explicitly and only ever touches
rows carrying that owner id. Input is validated before any write reaches the
store; store failures surface as StoreUnavailable.
"""
from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any, Mapping

from sqlalchemy import desc, or_
from sqlalchemy.orm import Session, contains_eager, joinedload

from app.core.database import store_errors
from app.core.errors import ValidationError
from app.models.application import Application, ApplicationStatus
from app.models.company import Company
from app.services.activity import log_application_activity
from app.services.ownership import load_owned, require_user

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("position", "company_id", "date_applied", "status")
OPTIONAL_FIELDS = ("notes", "interview_date", "offer_date", "rejected_date")
DATE_FIELDS = ("date_applied", "interview_date", "offer_date", "rejected_date")


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def coerce_status(value: Any) -> str:
    if isinstance(value, ApplicationStatus):
        return value.value
    if isinstance(value, str) and value in ApplicationStatus.values():
        return value
    raise ValidationError(
        f"Invalid status: {value!r}",
        details={"field": "status", "allowed": ApplicationStatus.values()},
    )


def _coerce_date(field: str, value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError:
            pass
    raise ValidationError(f"Invalid date for {field}: {value!r}", details={"field": field})


def _coerce_company_id(value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError("Invalid company_id", details={"field": "company_id"})
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError("Invalid company_id", details={"field": "company_id"})


def clean_application_fields(data: Mapping[str, Any], *, partial: bool) -> dict[str, Any]:
    """
    Validate and normalize caller-supplied fields.

    partial=False (create): every required field must be present and non-blank.
    partial=True (update): only supplied fields are checked, but a supplied
    required field may not be null/blank.
    """
    unknown = sorted(set(data) - set(REQUIRED_FIELDS) - set(OPTIONAL_FIELDS))
    if unknown:
        raise ValidationError(f"Unknown fields: {', '.join(unknown)}", details={"fields": unknown})

    out: dict[str, Any] = {}
    missing: list[str] = []

    for key in REQUIRED_FIELDS:
        if key not in data:
            if not partial:
                missing.append(key)
            continue
        value = data[key]
        if isinstance(value, str):
            value = value.strip()
        if value is None or value == "":
            missing.append(key)
            continue
        out[key] = value

    if missing:
        raise ValidationError(
            f"Missing required fields: {', '.join(missing)}",
            details={"fields": missing},
        )

    for key in OPTIONAL_FIELDS:
        if key not in data:
            continue
        value = data[key]
        if isinstance(value, str) and not value.strip():
            value = None
        out[key] = value

    if "status" in out:
        out["status"] = coerce_status(out["status"])
    if "company_id" in out:
        out["company_id"] = _coerce_company_id(out["company_id"])
    for key in DATE_FIELDS:
        if out.get(key) is not None:
            out[key] = _coerce_date(key, out[key])

    return out


def _require_owned_company(db: Session, owner_id: str, company_id: int) -> Company:
    company = (
        db.query(Company)
        .filter(Company.id == company_id, Company.owner_id == owner_id)
        .first()
    )
    if not company:
        # Same message whether the company is missing or belongs to someone else.
        raise ValidationError(
            "company_id does not reference one of your companies",
            details={"field": "company_id"},
        )
    return company


def get_application(db: Session, user_id: str | None, application_id: int) -> Application:
    owner = require_user(user_id)
    with store_errors(db, "load application"):
        return load_owned(
            db,
            Application,
            application_id,
            owner,
            label="Application",
            options=(joinedload(Application.company),),
        )


def list_applications(db: Session, user_id: str | None, q: str | None = None) -> list[Application]:
    owner = require_user(user_id)

    with store_errors(db, "list applications"):
        qry = (
            db.query(Application)
            .outerjoin(Company, Application.company_id == Company.id)
            .options(contains_eager(Application.company))
            .filter(Application.owner_id == owner)
        )

        # Text search (company name / position / status / company location)
        if q:
            term = str(q).strip()
            if term:
                like = _like_pattern(term)
                qry = qry.filter(
                    or_(
                        Company.name.ilike(like, escape="\\"),
                        Application.position.ilike(like, escape="\\"),
                        Application.status.ilike(like, escape="\\"),
                        Company.location.ilike(like, escape="\\"),
                    )
                )

        return qry.order_by(desc(Application.created_at), desc(Application.id)).all()


def create_application(db: Session, user_id: str | None, fields: Mapping[str, Any]) -> Application:
    owner = require_user(user_id)
    data = clean_application_fields(fields, partial=False)

    with store_errors(db, "create application"):
        _require_owned_company(db, owner, data["company_id"])

        application = Application(**data)
        application.owner_id = owner
        db.add(application)
        db.flush()

        log_application_activity(
            db,
            application_id=application.id,
            owner_id=owner,
            type="created",
            message=f"Application created with status {application.status}",
            data={"status": application.status},
        )

        db.commit()
        db.refresh(application)

    logger.info("Created application %s for owner %s", application.id, owner)
    return application


def update_application(
    db: Session,
    user_id: str | None,
    application_id: int,
    fields: Mapping[str, Any],
) -> Application:
    owner = require_user(user_id)
    data = clean_application_fields(fields, partial=True)

    with store_errors(db, "update application"):
        application = load_owned(db, Application, application_id, owner, label="Application")
        if not data:
            return application

        if "company_id" in data:
            _require_owned_company(db, owner, data["company_id"])

        prev_status = application.status
        for k, v in data.items():
            setattr(application, k, v)
        application.updated_at = _now()

        next_status = data.get("status")
        if next_status is not None and next_status != prev_status:
            log_application_activity(
                db,
                application_id=application.id,
                owner_id=owner,
                type="status_changed",
                message=f"Status changed to {next_status}",
                data={"from": prev_status, "to": next_status},
            )
        else:
            log_application_activity(
                db,
                application_id=application.id,
                owner_id=owner,
                type="updated",
                message="Application updated",
                data={"fields": sorted(data)},
            )

        db.commit()
        db.refresh(application)

    logger.info("Updated application %s (%s)", application.id, ", ".join(sorted(data)))
    return application


def delete_application(db: Session, user_id: str | None, application_id: int) -> None:
    owner = require_user(user_id)
    with store_errors(db, "delete application"):
        application = load_owned(db, Application, application_id, owner, label="Application")
        db.delete(application)
        db.commit()
    logger.info("Deleted application %s for owner %s", application_id, owner)
