"""
Shared fixtures: an in-memory database per test and the repositories built on it.
"""
import pytest
import pytest_asyncio

from gonext.config.settings import DatabaseSettings, StorageBackend
from gonext.core.db import Database
from gonext.schemas.place import PlaceCreate
from gonext.schemas.trip import TripCreate
from gonext.services.data_purge_service import DataPurgeService
from gonext.services.photo_service import PhotoRepository
from gonext.services.photo_store import FileSystemPhotoStore
from gonext.services.place_service import PlaceRepository
from gonext.services.trip_place_service import TripPlaceRepository
from gonext.services.trip_service import TripRepository


@pytest_asyncio.fixture
async def database():
    db = Database(DatabaseSettings(backend=StorageBackend.MEMORY))
    await db.initialize()
    yield db
    await db.close()


@pytest.fixture
def place_repo(database):
    return PlaceRepository(database)


@pytest.fixture
def trip_repo(database):
    return TripRepository(database)


@pytest.fixture
def trip_place_repo(database):
    return TripPlaceRepository(database)


@pytest_asyncio.fixture
async def photo_store(tmp_path):
    store = FileSystemPhotoStore(tmp_path / "photos")
    await store.initialize()
    return store


@pytest.fixture
def photo_repo(database, photo_store):
    return PhotoRepository(database, photo_store)


@pytest.fixture
def purge_service(database, photo_store):
    return DataPurgeService(database, photo_store)


@pytest.fixture
def image_file(tmp_path):
    """A stand-in for a picked or captured image"""
    path = tmp_path / "picked.jpg"
    path.write_bytes(b"\xff\xd8\xff\xe0fake-jpeg")
    return path


@pytest_asyncio.fixture
async def sample_place(place_repo):
    return await place_repo.create(
        PlaceCreate(name="Red Square", description="Main square", dd="55.7539,37.6208")
    )


@pytest_asyncio.fixture
async def sample_trip(trip_repo):
    return await trip_repo.create(
        TripCreate(title="Moscow weekend", start_date="2024-06-01", end_date="2024-06-03")
    )
