from pydantic import BaseModel
from typing import Optional


class PhotoRead(BaseModel):
    id: str
    place_id: str
    trip_place_id: Optional[str] = None
    file_path: str
    created_at: str

    model_config = {"from_attributes": True}


class DataStats(BaseModel):
    places: int = 0
    trips: int = 0
    trip_places: int = 0
    photos: int = 0
