from datetime import date, datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from app.models.application import ApplicationStatus
from app.schemas.company import CompanySummaryOut


class ApplicationCreate(BaseModel):
    position: str = Field(min_length=1, max_length=255)
    company_id: int
    date_applied: date = Field(default_factory=date.today)
    status: ApplicationStatus = ApplicationStatus.APPLIED
    notes: Optional[str] = None
    interview_date: Optional[date] = None
    offer_date: Optional[date] = None
    rejected_date: Optional[date] = None


class ApplicationUpdate(BaseModel):
    # Only fields present in the payload are applied (exclude_unset).
    position: Optional[str] = Field(default=None, max_length=255)
    company_id: Optional[int] = None
    date_applied: Optional[date] = None
    status: Optional[ApplicationStatus] = None
    notes: Optional[str] = None
    interview_date: Optional[date] = None
    offer_date: Optional[date] = None
    rejected_date: Optional[date] = None


class ApplicationOut(BaseModel):
    id: int
    owner_id: str
    position: str
    company_id: int
    date_applied: date
    status: str
    notes: Optional[str] = None
    interview_date: Optional[date] = None
    offer_date: Optional[date] = None
    rejected_date: Optional[date] = None
    created_at: datetime
    updated_at: datetime
    company: Optional[CompanySummaryOut] = None

    @field_serializer("created_at", "updated_at")
    def serialize_dt(self, dt: Optional[datetime]):
        if dt is None:
            return None
        # SQLite hands back naive values; they are stored as UTC.
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)

    model_config = ConfigDict(from_attributes=True)
