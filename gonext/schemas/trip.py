"""
Trip schemas
"""
from pydantic import BaseModel, field_validator, model_validator
from typing import Optional

from gonext.core.validation import validate_trip
from gonext.schemas.base import blank_to_none


class TripCreate(BaseModel):
    """Schema for creating a new trip"""
    title: str
    description: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    current: bool = False

    @field_validator("description", "start_date", "end_date", mode="before")
    @classmethod
    def normalize_optional(cls, v):
        return blank_to_none(v)

    @field_validator("start_date", "end_date")
    @classmethod
    def strip_dates(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v else v

    @model_validator(mode="after")
    def check_trip(self):
        validate_trip(self.title, self.description, self.start_date, self.end_date)
        self.title = self.title.strip()
        return self


class TripUpdate(BaseModel):
    """Schema for partially updating a trip; only set fields are applied"""
    title: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    current: Optional[bool] = None

    @field_validator("description", "start_date", "end_date", mode="before")
    @classmethod
    def normalize_optional(cls, v):
        return blank_to_none(v)


class TripRead(BaseModel):
    """Schema for a stored trip"""
    id: str
    title: str
    description: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    current: bool
    created_at: str

    model_config = {"from_attributes": True}
