"""Data purge service.

Whole-journal statistics and the "clear all data" operation. Returns summary counts.
"""
import logging

from sqlalchemy import delete, select, func

from gonext.core.db import Database
from gonext.core.exceptions import FileSystemError, PhotosUnsupportedError
from gonext.models.photo import PlacePhoto
from gonext.models.place import Place
from gonext.models.trip import Trip
from gonext.models.trip_place import TripPlace
from gonext.schemas.photo import DataStats
from gonext.services.photo_store import PhotoStore

logger = logging.getLogger(__name__)

# children before parents
_TABLES = (
    ("photos", PlacePhoto),
    ("trip_places", TripPlace),
    ("trips", Trip),
    ("places", Place),
)


class DataPurgeService:
    def __init__(self, db: Database, store: PhotoStore):
        self.db = db
        self.store = store

    async def get_stats(self) -> DataStats:
        async with self.db.session() as session:
            counts = {}
            for name, model in _TABLES:
                counts[name] = (await session.execute(select(func.count(model.id)))).scalar_one()
        return DataStats(**counts)

    async def clear_all(self) -> dict:
        """Delete every photo, itinerary entry, trip and place.

        Rows are removed in one transaction; photo files are removed afterwards
        on a best-effort basis.
        """
        async with self.db.session() as session:
            counts = {}
            for name, model in _TABLES:
                counts[f"{name}_before"] = (
                    await session.execute(select(func.count(model.id)))
                ).scalar_one()

            file_paths = (await session.execute(select(PlacePhoto.file_path))).scalars().all()

            for _, model in _TABLES:
                await session.execute(delete(model))
            await session.commit()

        for name, _ in _TABLES:
            counts[f"{name}_deleted"] = counts[f"{name}_before"]

        files_removed = 0
        if self.store.supported:
            for path in file_paths:
                try:
                    if await self.store.remove(path):
                        files_removed += 1
                except (FileSystemError, PhotosUnsupportedError) as exc:
                    logger.error("Failed to delete photo file %s: %s", path, exc.message)
        counts["files_removed"] = files_removed

        logger.info("Cleared all journal data: %s", counts)
        return counts
