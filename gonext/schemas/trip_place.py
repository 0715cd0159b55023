"""
Itinerary (trip place) schemas
"""
from pydantic import BaseModel, field_validator
from typing import Optional

from gonext.core.validation import validate_order
from gonext.schemas.base import blank_to_none
from gonext.schemas.place import PlaceRead


class TripPlaceRead(BaseModel):
    """Schema for a stored itinerary entry"""
    id: str
    trip_id: str
    place_id: str
    order: int
    visited: bool
    visit_date: Optional[str] = None
    notes: Optional[str] = None

    model_config = {"from_attributes": True}


class TripPlaceWithPlace(TripPlaceRead):
    """Itinerary entry enriched with its referenced place"""
    place: PlaceRead


class TripPlaceUpdate(BaseModel):
    """Schema for partially updating an itinerary entry"""
    order: Optional[int] = None
    visited: Optional[bool] = None
    visit_date: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("visit_date", "notes", mode="before")
    @classmethod
    def normalize_optional(cls, v):
        return blank_to_none(v)

    @field_validator("order")
    @classmethod
    def check_order(cls, v: Optional[int]) -> Optional[int]:
        if v is None:
            return v
        return validate_order(v)


class OrderAssignment(BaseModel):
    """New position for one itinerary entry"""
    id: str
    order: int

    @field_validator("order")
    @classmethod
    def check_order(cls, v: int) -> int:
        return validate_order(v)


class TripProgress(BaseModel):
    """Visitation progress of a trip"""
    trip_id: str
    total: int = 0
    visited: int = 0

    @property
    def remaining(self) -> int:
        return self.total - self.visited

    @property
    def ratio(self) -> float:
        if self.total == 0:
            return 0.0
        return self.visited / self.total
