from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CompanyCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    website: Optional[str] = Field(default=None, max_length=500)
    location: Optional[str] = Field(default=None, max_length=255)
    industry: Optional[str] = Field(default=None, max_length=255)


class CompanyUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    website: Optional[str] = Field(default=None, max_length=500)
    location: Optional[str] = Field(default=None, max_length=255)
    industry: Optional[str] = Field(default=None, max_length=255)


class CompanySummaryOut(BaseModel):
    id: int
    name: str
    website: Optional[str] = None
    location: Optional[str] = None
    industry: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class CompanyOut(CompanySummaryOut):
    created_at: datetime
    updated_at: datetime
