from enum import Enum

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.core.base import Base


class ApplicationStatus(str, Enum):
    APPLIED = "Applied"
    INTERVIEW_SCHEDULED = "Interview Scheduled"
    IN_PROGRESS = "In Progress"
    OFFER = "Offer"
    REJECTED = "Rejected"

    @classmethod
    def values(cls) -> list[str]:
        return [s.value for s in cls]


# Statuses counted together as "interviewing" on the dashboard.
INTERVIEWING_STATUSES = frozenset(
    {ApplicationStatus.INTERVIEW_SCHEDULED.value, ApplicationStatus.IN_PROGRESS.value}
)


class Application(Base):
    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, index=True)

    # ownership
    owner_id = Column(String(64), nullable=False, index=True)

    company_id = Column(
        Integer,
        ForeignKey("companies.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    position = Column(String(255), nullable=False)
    date_applied = Column(Date, nullable=False)

    # One of ApplicationStatus; the column itself is a plain string.
    status = Column(String(32), nullable=False, default=ApplicationStatus.APPLIED.value)
    notes = Column(Text, nullable=True)

    interview_date = Column(Date, nullable=True)
    offer_date = Column(Date, nullable=True)
    rejected_date = Column(Date, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    company = relationship("Company", back_populates="applications")

    activities = relationship(
        "ApplicationActivity",
        back_populates="application",
        cascade="all, delete-orphan",
    )
