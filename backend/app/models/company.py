from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.core.base import Base


class Company(Base):
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, index=True)

    # Identity-provider subject of the creator; the only authorization boundary.
    owner_id = Column(String(64), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    website = Column(String(500), nullable=True)
    location = Column(String(255), nullable=True)
    industry = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    # No delete cascade: a referenced company cannot be deleted.
    applications = relationship("Application", back_populates="company")
