from .base import build, blank_to_none
from .place import PlaceCreate, PlaceUpdate, PlaceRead
from .trip import TripCreate, TripUpdate, TripRead
from .trip_place import (
    TripPlaceRead,
    TripPlaceWithPlace,
    TripPlaceUpdate,
    OrderAssignment,
    TripProgress,
)
from .photo import PhotoRead, DataStats

__all__ = [
    "build",
    "blank_to_none",
    "PlaceCreate",
    "PlaceUpdate",
    "PlaceRead",
    "TripCreate",
    "TripUpdate",
    "TripRead",
    "TripPlaceRead",
    "TripPlaceWithPlace",
    "TripPlaceUpdate",
    "OrderAssignment",
    "TripProgress",
    "PhotoRead",
    "DataStats",
]
