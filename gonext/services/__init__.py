# Repositories and services

from .place_service import PlaceRepository
from .trip_service import TripRepository
from .trip_place_service import TripPlaceRepository, MOVE_UP, MOVE_DOWN
from .photo_store import PhotoStore, FileSystemPhotoStore, DisabledPhotoStore, create_photo_store
from .photo_service import PhotoRepository
from .data_purge_service import DataPurgeService

__all__ = [
    "PlaceRepository",
    "TripRepository",
    "TripPlaceRepository",
    "MOVE_UP",
    "MOVE_DOWN",
    "PhotoStore",
    "FileSystemPhotoStore",
    "DisabledPhotoStore",
    "create_photo_store",
    "PhotoRepository",
    "DataPurgeService",
]
