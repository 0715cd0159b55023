"""
Photo Service - Photo records and their files

Deleting a photo removes the file on a best-effort basis and always removes
the record: a file system failure is logged, never raised.
"""
import logging
from pathlib import Path
from typing import List, Optional, Union

from sqlalchemy import select, delete, literal_column

from gonext.core.db import Database
from gonext.core.exceptions import (
    FileSystemError,
    GoNextException,
    NotFoundError,
    PhotosUnsupportedError,
    ValidationFailure,
)
from gonext.core.ids import generate_id, current_timestamp
from gonext.core.validation import validate_required
from gonext.models.photo import PlacePhoto
from gonext.models.place import Place
from gonext.models.trip_place import TripPlace
from gonext.schemas.photo import PhotoRead
from gonext.services.photo_store import PhotoStore

logger = logging.getLogger(__name__)

_NEWEST_FIRST = (PlacePhoto.created_at.desc(), literal_column("place_photos.rowid").desc())


class PhotoRepository:
    """Manages photos attached to places and visits"""

    def __init__(self, db: Database, store: PhotoStore):
        self.db = db
        self.store = store

    def _require_support(self, operation: str) -> None:
        if not self.store.supported:
            raise PhotosUnsupportedError(operation)

    async def add_photo_to_place(
        self,
        place_id: str,
        file_path: str,
        trip_place_id: Optional[str] = None,
    ) -> PhotoRead:
        """
        Record a photo for a place, optionally scoped to one visit

        Args:
            place_id: Owning place
            file_path: Path of the stored image file
            trip_place_id: Itinerary entry the photo was taken on, if any

        Raises:
            PhotosUnsupportedError: If photo storage is disabled
            NotFoundError: If the place or itinerary entry does not exist
            ValidationFailure: If the itinerary entry belongs to another place
        """
        self._require_support("add_photo_to_place")
        validate_required(file_path, "file_path")

        async with self.db.session() as session:
            if await session.get(Place, place_id) is None:
                raise NotFoundError("Place", place_id)
            if trip_place_id:
                trip_place = await session.get(TripPlace, trip_place_id)
                if trip_place is None:
                    raise NotFoundError("TripPlace", trip_place_id)
                if trip_place.place_id != place_id:
                    raise ValidationFailure(
                        f"Trip place {trip_place_id} does not reference place {place_id}",
                        field="trip_place_id",
                    )

            photo = PlacePhoto(
                id=generate_id(),
                place_id=place_id,
                trip_place_id=trip_place_id or None,
                file_path=file_path,
                created_at=current_timestamp(),
            )
            session.add(photo)
            await session.commit()

        logger.info("Added photo %s to place %s", photo.id, place_id)
        return PhotoRead.model_validate(photo)

    async def import_photo(
        self,
        place_id: str,
        source: Union[str, Path],
        trip_place_id: Optional[str] = None,
    ) -> PhotoRead:
        """Copy an image into the photo store and record it"""
        self._require_support("import_photo")
        file_path = await self.store.import_file(source)
        try:
            return await self.add_photo_to_place(place_id, file_path, trip_place_id)
        except GoNextException:
            await self._remove_file(file_path)
            raise

    async def get_by_id(self, photo_id: str) -> Optional[PhotoRead]:
        async with self.db.session() as session:
            photo = await session.get(PlacePhoto, photo_id)
        if photo is None:
            return None
        return PhotoRead.model_validate(photo)

    async def _list(self, *criteria) -> List[PhotoRead]:
        if not self.store.supported:
            return []
        stmt = select(PlacePhoto).where(*criteria).order_by(*_NEWEST_FIRST)
        async with self.db.session() as session:
            result = await session.execute(stmt)
            photos = result.scalars().all()
        return [PhotoRead.model_validate(p) for p in photos]

    async def get_photos_by_place_id(self, place_id: str) -> List[PhotoRead]:
        """All photos of a place, including visit photos, newest first"""
        return await self._list(PlacePhoto.place_id == place_id)

    async def get_photos_by_trip_place_id(self, trip_place_id: str) -> List[PhotoRead]:
        """Photos taken on one visit, newest first"""
        return await self._list(PlacePhoto.trip_place_id == trip_place_id)

    async def _remove_file(self, file_path: str) -> None:
        try:
            if await self.store.exists(file_path):
                await self.store.remove(file_path)
            else:
                logger.info("Photo file %s already missing", file_path)
        except FileSystemError as exc:
            logger.error("Failed to delete photo file %s: %s", file_path, exc.message)

    async def delete_photo(self, photo_id: str) -> None:
        """
        Delete a photo file and its record

        Raises:
            PhotosUnsupportedError: If photo storage is disabled
            NotFoundError: If the photo does not exist
        """
        self._require_support("delete_photo")

        async with self.db.session() as session:
            photo = await session.get(PlacePhoto, photo_id)
            if photo is None:
                raise NotFoundError("PlacePhoto", photo_id)
            file_path = photo.file_path

        await self._remove_file(file_path)

        async with self.db.session() as session:
            await session.execute(delete(PlacePhoto).where(PlacePhoto.id == photo_id))
            await session.commit()

        logger.info("Deleted photo %s", photo_id)

    async def delete_photos_by_place_id(self, place_id: str) -> int:
        photos = await self.get_photos_by_place_id(place_id)
        for photo in photos:
            await self.delete_photo(photo.id)
        return len(photos)

    async def delete_photos_by_trip_place_id(self, trip_place_id: str) -> int:
        photos = await self.get_photos_by_trip_place_id(trip_place_id)
        for photo in photos:
            await self.delete_photo(photo.id)
        return len(photos)
