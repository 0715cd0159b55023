"""
Place schemas
"""
from pydantic import BaseModel, field_validator, model_validator
from typing import Optional

from gonext.core.validation import validate_place
from gonext.schemas.base import blank_to_none


class PlaceCreate(BaseModel):
    """Schema for creating a new place"""
    name: str
    description: Optional[str] = None
    visit_later: bool = False
    liked: bool = False
    dd: Optional[str] = None

    @field_validator("description", "dd", mode="before")
    @classmethod
    def normalize_optional(cls, v):
        return blank_to_none(v)

    @field_validator("dd")
    @classmethod
    def strip_coordinates(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v else v

    @model_validator(mode="after")
    def check_place(self):
        validate_place(self.name, self.description, self.dd)
        self.name = self.name.strip()
        return self


class PlaceUpdate(BaseModel):
    """Schema for partially updating a place; only set fields are applied"""
    name: Optional[str] = None
    description: Optional[str] = None
    visit_later: Optional[bool] = None
    liked: Optional[bool] = None
    dd: Optional[str] = None

    @field_validator("description", "dd", mode="before")
    @classmethod
    def normalize_optional(cls, v):
        return blank_to_none(v)


class PlaceRead(BaseModel):
    """Schema for a stored place"""
    id: str
    name: str
    description: Optional[str] = None
    visit_later: bool
    liked: bool
    dd: Optional[str] = None
    created_at: str

    model_config = {"from_attributes": True}
