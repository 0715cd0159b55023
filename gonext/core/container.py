"""
Service container: builds the storage handles and repositories once per process
and hands the same instances to every consumer.
"""
import asyncio
import logging
from typing import Optional

from gonext.config.settings import Settings
from gonext.core.db import Database
from gonext.core.logging import configure_logging
from gonext.services.data_purge_service import DataPurgeService
from gonext.services.photo_service import PhotoRepository
from gonext.services.photo_store import PhotoStore, create_photo_store
from gonext.services.place_service import PlaceRepository
from gonext.services.trip_place_service import TripPlaceRepository
from gonext.services.trip_service import TripRepository

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Container for the journal repositories with lifecycle management."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._database: Optional[Database] = None
        self._photo_store: Optional[PhotoStore] = None
        self._places: Optional[PlaceRepository] = None
        self._trips: Optional[TripRepository] = None
        self._trip_places: Optional[TripPlaceRepository] = None
        self._photos: Optional[PhotoRepository] = None
        self._data_purge: Optional[DataPurgeService] = None
        self._initialized = False
        self._initialization_lock = asyncio.Lock()

    async def initialize(self) -> None:
        """Open the database, prepare the photo store and build the repositories."""
        async with self._initialization_lock:
            if self._initialized:
                return

            configure_logging(
                self.settings.log_level.value, self.settings.log_format, self.settings.log_file
            )
            logger.info("Initializing service container")
            database = Database(self.settings.database)
            try:
                await database.initialize()

                photo_store = create_photo_store(self.settings.photos)
                await photo_store.initialize()
            except Exception as e:
                logger.error("Service container initialization failed: %s", e, exc_info=True)
                await database.close()
                raise

            self._database = database
            self._photo_store = photo_store
            self._places = PlaceRepository(database)
            self._trips = TripRepository(database)
            self._trip_places = TripPlaceRepository(database)
            self._photos = PhotoRepository(database, photo_store)
            self._data_purge = DataPurgeService(database, photo_store)

            self._initialized = True
            logger.info("Service container initialization completed")

    async def shutdown(self) -> None:
        """Close the database and drop every repository."""
        logger.info("Shutting down service container")
        try:
            if self._database is not None:
                await self._database.close()
        finally:
            self._data_purge = None
            self._photos = None
            self._trip_places = None
            self._trips = None
            self._places = None
            self._photo_store = None
            self._database = None
            self._initialized = False

    def _get(self, service):
        if not self._initialized or service is None:
            raise RuntimeError("Service container not initialized")
        return service

    @property
    def database(self) -> Database:
        return self._get(self._database)

    @property
    def photo_store(self) -> PhotoStore:
        return self._get(self._photo_store)

    @property
    def places(self) -> PlaceRepository:
        return self._get(self._places)

    @property
    def trips(self) -> TripRepository:
        return self._get(self._trips)

    @property
    def trip_places(self) -> TripPlaceRepository:
        return self._get(self._trip_places)

    @property
    def photos(self) -> PhotoRepository:
        return self._get(self._photos)

    @property
    def data_purge(self) -> DataPurgeService:
        return self._get(self._data_purge)
