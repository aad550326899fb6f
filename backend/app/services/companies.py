from __future__ import annotations

import logging
from typing import Any, Mapping

from sqlalchemy import asc
from sqlalchemy.orm import Session

from app.core.database import store_errors
from app.core.errors import Conflict, ValidationError
from app.models.application import Application
from app.models.company import Company
from app.services.ownership import load_owned, require_user

logger = logging.getLogger(__name__)

COMPANY_FIELDS = ("name", "website", "location", "industry")


def _clean_company_fields(data: Mapping[str, Any], *, partial: bool) -> dict[str, Any]:
    unknown = sorted(set(data) - set(COMPANY_FIELDS))
    if unknown:
        raise ValidationError(f"Unknown fields: {', '.join(unknown)}", details={"fields": unknown})

    out: dict[str, Any] = {}
    for key in COMPANY_FIELDS:
        if key not in data:
            continue
        value = data[key]
        if isinstance(value, str):
            value = value.strip() or None
        out[key] = value

    if (not partial or "name" in out) and not out.get("name"):
        raise ValidationError("Name is required", details={"fields": ["name"]})
    return out


def list_companies(db: Session, user_id: str | None) -> list[Company]:
    owner = require_user(user_id)
    with store_errors(db, "list companies"):
        return (
            db.query(Company)
            .filter(Company.owner_id == owner)
            .order_by(asc(Company.name), asc(Company.id))
            .all()
        )


def get_company(db: Session, user_id: str | None, company_id: int) -> Company:
    owner = require_user(user_id)
    with store_errors(db, "load company"):
        return load_owned(db, Company, company_id, owner, label="Company")


def create_company(db: Session, user_id: str | None, fields: Mapping[str, Any]) -> Company:
    owner = require_user(user_id)
    data = _clean_company_fields(fields, partial=False)

    with store_errors(db, "create company"):
        company = Company(owner_id=owner, **data)
        db.add(company)
        db.commit()
        db.refresh(company)

    logger.info("Created company %s for owner %s", company.id, owner)
    return company


def update_company(db: Session, user_id: str | None, company_id: int, fields: Mapping[str, Any]) -> Company:
    owner = require_user(user_id)
    data = _clean_company_fields(fields, partial=True)

    with store_errors(db, "update company"):
        company = load_owned(db, Company, company_id, owner, label="Company")
        if not data:
            return company
        for k, v in data.items():
            setattr(company, k, v)
        db.commit()
        db.refresh(company)
    return company


def delete_company(db: Session, user_id: str | None, company_id: int) -> None:
    """Deletion is blocked while any application still references the company."""
    owner = require_user(user_id)
    with store_errors(db, "delete company"):
        company = load_owned(db, Company, company_id, owner, label="Company")
        in_use = (
            db.query(Application.id)
            .filter(Application.company_id == company.id)
            .count()
        )
        if in_use:
            raise Conflict(
                "Company is referenced by existing applications",
                details={"applications": in_use},
            )
        db.delete(company)
        db.commit()
    logger.info("Deleted company %s for owner %s", company_id, owner)
