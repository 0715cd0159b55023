"""
Unit tests for photo records and their files
"""
import logging
from pathlib import Path

import pytest

from gonext.core.exceptions import NotFoundError, PhotosUnsupportedError, ValidationFailure
from gonext.schemas.place import PlaceCreate
from gonext.services.photo_service import PhotoRepository
from gonext.services.photo_store import DisabledPhotoStore


@pytest.mark.asyncio
async def test_import_photo(photo_repo, sample_place, image_file):
    """Test importing a picked image for a place"""
    photo = await photo_repo.import_photo(sample_place.id, image_file)

    assert photo.place_id == sample_place.id
    assert photo.trip_place_id is None
    assert Path(photo.file_path).exists()
    assert photo.created_at.endswith("Z")
    assert await photo_repo.get_by_id(photo.id) == photo


@pytest.mark.asyncio
async def test_visit_photos(photo_repo, trip_place_repo, sample_trip, sample_place, image_file):
    """Visit photos show up for the visit and for the place"""
    entry = await trip_place_repo.append_place(sample_trip.id, sample_place.id)
    general = await photo_repo.import_photo(sample_place.id, image_file)
    visit = await photo_repo.import_photo(sample_place.id, image_file, trip_place_id=entry.id)

    by_place = await photo_repo.get_photos_by_place_id(sample_place.id)
    assert [p.id for p in by_place] == [visit.id, general.id]

    by_visit = await photo_repo.get_photos_by_trip_place_id(entry.id)
    assert [p.id for p in by_visit] == [visit.id]


@pytest.mark.asyncio
async def test_add_photo_checks_references(photo_repo, place_repo, trip_place_repo, sample_trip, sample_place):
    other = await place_repo.create(PlaceCreate(name="Other"))
    entry = await trip_place_repo.append_place(sample_trip.id, other.id)

    with pytest.raises(NotFoundError):
        await photo_repo.add_photo_to_place("missing", "/tmp/a.jpg")
    with pytest.raises(NotFoundError):
        await photo_repo.add_photo_to_place(sample_place.id, "/tmp/a.jpg", trip_place_id="missing")
    with pytest.raises(ValidationFailure):
        await photo_repo.add_photo_to_place(sample_place.id, "/tmp/a.jpg", trip_place_id=entry.id)
    with pytest.raises(ValidationFailure):
        await photo_repo.add_photo_to_place(sample_place.id, "  ")


@pytest.mark.asyncio
async def test_failed_import_removes_copied_file(photo_repo, photo_store, image_file):
    with pytest.raises(NotFoundError):
        await photo_repo.import_photo("missing", image_file)

    assert list(photo_store.directory.iterdir()) == []


@pytest.mark.asyncio
async def test_delete_photo(photo_repo, sample_place, image_file):
    photo = await photo_repo.import_photo(sample_place.id, image_file)

    await photo_repo.delete_photo(photo.id)

    assert not Path(photo.file_path).exists()
    assert await photo_repo.get_by_id(photo.id) is None
    with pytest.raises(NotFoundError):
        await photo_repo.delete_photo(photo.id)


@pytest.mark.asyncio
async def test_delete_photo_with_missing_file(photo_repo, sample_place, image_file):
    photo = await photo_repo.import_photo(sample_place.id, image_file)
    Path(photo.file_path).unlink()

    await photo_repo.delete_photo(photo.id)

    assert await photo_repo.get_by_id(photo.id) is None


@pytest.mark.asyncio
async def test_delete_photo_file_failure_is_logged(photo_repo, photo_store, sample_place, caplog):
    """A file that cannot be removed does not keep the record alive"""
    blocker = photo_store.directory / "stuck.jpg"
    blocker.mkdir()
    photo = await photo_repo.add_photo_to_place(sample_place.id, str(blocker))

    with caplog.at_level(logging.ERROR, logger="gonext.services.photo_service"):
        await photo_repo.delete_photo(photo.id)

    assert await photo_repo.get_by_id(photo.id) is None
    assert "Failed to delete photo file" in caplog.text


@pytest.mark.asyncio
async def test_bulk_delete(photo_repo, trip_place_repo, sample_trip, sample_place, image_file):
    entry = await trip_place_repo.append_place(sample_trip.id, sample_place.id)
    await photo_repo.import_photo(sample_place.id, image_file)
    await photo_repo.import_photo(sample_place.id, image_file, trip_place_id=entry.id)

    assert await photo_repo.delete_photos_by_trip_place_id(entry.id) == 1
    assert await photo_repo.delete_photos_by_place_id(sample_place.id) == 1
    assert await photo_repo.get_photos_by_place_id(sample_place.id) == []


@pytest.mark.asyncio
async def test_disabled_photo_backend(database, sample_place, image_file):
    """Without a photo store lists are empty and mutations are refused"""
    repo = PhotoRepository(database, DisabledPhotoStore())

    assert await repo.get_photos_by_place_id(sample_place.id) == []
    assert await repo.get_photos_by_trip_place_id("any") == []
    with pytest.raises(PhotosUnsupportedError):
        await repo.import_photo(sample_place.id, image_file)
    with pytest.raises(PhotosUnsupportedError):
        await repo.add_photo_to_place(sample_place.id, str(image_file))
    with pytest.raises(PhotosUnsupportedError):
        await repo.delete_photo("any")


@pytest.mark.asyncio
async def test_delete_photo_with_unusable_path(photo_repo, sample_place, tmp_path):
    """A path the OS rejects still lets the record go"""
    photo = await photo_repo.add_photo_to_place(sample_place.id, str(tmp_path / ("a" * 300 + ".jpg")))

    await photo_repo.delete_photo(photo.id)

    assert await photo_repo.get_by_id(photo.id) is None


@pytest.mark.asyncio
async def test_delete_photo_existence_check_failure_is_logged(photo_repo, sample_place, image_file,
                                                               monkeypatch, caplog):
    photo = await photo_repo.import_photo(sample_place.id, image_file)

    def denied(self):
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "exists", denied)
    with caplog.at_level(logging.ERROR, logger="gonext.services.photo_service"):
        await photo_repo.delete_photo(photo.id)
    monkeypatch.undo()

    assert await photo_repo.get_by_id(photo.id) is None
    assert "Failed to delete photo file" in caplog.text
