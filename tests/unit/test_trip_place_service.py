"""
Unit tests for itinerary membership, ordering and visits
"""
import pytest

from gonext.core.exceptions import NotFoundError, ValidationFailure
from gonext.schemas.place import PlaceCreate
from gonext.schemas.trip import TripCreate
from gonext.schemas.trip_place import OrderAssignment, TripPlaceUpdate
from gonext.services.trip_place_service import MOVE_UP, MOVE_DOWN


async def _places(place_repo, *names):
    return [await place_repo.create(PlaceCreate(name=name)) for name in names]


@pytest.mark.asyncio
async def test_add_place_to_trip(trip_place_repo, sample_trip, sample_place):
    """Test adding a place with an explicit order"""
    entry = await trip_place_repo.add_place_to_trip(sample_trip.id, sample_place.id, 1)

    assert entry.trip_id == sample_trip.id
    assert entry.place_id == sample_place.id
    assert entry.order == 1
    assert entry.visited is False
    assert entry.visit_date is None
    assert entry.notes is None


@pytest.mark.asyncio
async def test_add_place_validates_references(trip_place_repo, sample_trip, sample_place):
    with pytest.raises(NotFoundError) as exc_info:
        await trip_place_repo.add_place_to_trip("missing", sample_place.id, 1)
    assert exc_info.value.entity == "Trip"

    with pytest.raises(NotFoundError) as exc_info:
        await trip_place_repo.add_place_to_trip(sample_trip.id, "missing", 1)
    assert exc_info.value.entity == "Place"

    with pytest.raises(ValidationFailure):
        await trip_place_repo.add_place_to_trip(sample_trip.id, sample_place.id, 0)

    assert await trip_place_repo.get_trip_places(sample_trip.id) == []


@pytest.mark.asyncio
async def test_same_place_can_appear_twice(trip_place_repo, sample_trip, sample_place):
    await trip_place_repo.add_place_to_trip(sample_trip.id, sample_place.id, 1)
    await trip_place_repo.add_place_to_trip(sample_trip.id, sample_place.id, 2)

    entries = await trip_place_repo.get_trip_places(sample_trip.id)
    assert [e.place_id for e in entries] == [sample_place.id, sample_place.id]


@pytest.mark.asyncio
async def test_get_trip_places_sorted_with_place(trip_place_repo, place_repo, sample_trip):
    """Entries come back by order, ties in insertion order"""
    a, b, c = await _places(place_repo, "A", "B", "C")
    await trip_place_repo.add_place_to_trip(sample_trip.id, a.id, 3)
    await trip_place_repo.add_place_to_trip(sample_trip.id, b.id, 1)
    await trip_place_repo.add_place_to_trip(sample_trip.id, c.id, 3)

    entries = await trip_place_repo.get_trip_places(sample_trip.id)

    assert [e.place.name for e in entries] == ["B", "A", "C"]
    assert entries[0].place.id == b.id


@pytest.mark.asyncio
async def test_get_trip_places_empty(trip_place_repo, sample_trip):
    assert await trip_place_repo.get_trip_places(sample_trip.id) == []
    assert await trip_place_repo.get_trip_places("missing") == []


@pytest.mark.asyncio
async def test_append_uses_next_order(trip_place_repo, place_repo, sample_trip):
    a, b = await _places(place_repo, "A", "B")
    assert await trip_place_repo.next_order(sample_trip.id) == 1

    await trip_place_repo.add_place_to_trip(sample_trip.id, a.id, 5)
    entry = await trip_place_repo.append_place(sample_trip.id, b.id)

    assert entry.order == 6


@pytest.mark.asyncio
async def test_update_trip_places_order(trip_place_repo, place_repo, sample_trip):
    """Test reassigning positions in one call"""
    a, b, c = await _places(place_repo, "A", "B", "C")
    ea = await trip_place_repo.append_place(sample_trip.id, a.id)
    eb = await trip_place_repo.append_place(sample_trip.id, b.id)
    ec = await trip_place_repo.append_place(sample_trip.id, c.id)

    updated = await trip_place_repo.update_trip_places_order(
        sample_trip.id,
        [{"id": ec.id, "order": 1}, OrderAssignment(id=ea.id, order=2), {"id": eb.id, "order": 3}],
    )

    assert updated == 3
    entries = await trip_place_repo.get_trip_places(sample_trip.id)
    assert [e.place.name for e in entries] == ["C", "A", "B"]
    assert [e.order for e in entries] == [1, 2, 3]


@pytest.mark.asyncio
async def test_update_order_rejects_bad_requests(trip_place_repo, place_repo, sample_trip):
    a, b = await _places(place_repo, "A", "B")
    ea = await trip_place_repo.append_place(sample_trip.id, a.id)
    eb = await trip_place_repo.append_place(sample_trip.id, b.id)

    with pytest.raises(ValidationFailure, match="Duplicate order"):
        await trip_place_repo.update_trip_places_order(
            sample_trip.id, [{"id": ea.id, "order": 1}, {"id": eb.id, "order": 1}]
        )
    with pytest.raises(ValidationFailure, match="Duplicate id"):
        await trip_place_repo.update_trip_places_order(
            sample_trip.id, [{"id": ea.id, "order": 1}, {"id": ea.id, "order": 2}]
        )
    with pytest.raises(ValidationFailure):
        await trip_place_repo.update_trip_places_order(sample_trip.id, [{"id": ea.id, "order": -1}])

    entries = await trip_place_repo.get_trip_places(sample_trip.id)
    assert [(e.id, e.order) for e in entries] == [(ea.id, 1), (eb.id, 2)]


@pytest.mark.asyncio
async def test_update_order_skips_foreign_entries(trip_place_repo, trip_repo, sample_trip, sample_place):
    other_trip = await trip_repo.create(TripCreate(title="Other"))
    foreign = await trip_place_repo.append_place(other_trip.id, sample_place.id)

    updated = await trip_place_repo.update_trip_places_order(
        sample_trip.id, [{"id": foreign.id, "order": 9}]
    )

    assert updated == 0
    assert (await trip_place_repo.get_by_id(foreign.id)).order == 1


@pytest.mark.asyncio
async def test_move_place(trip_place_repo, place_repo, sample_trip):
    """Test swapping neighbours and renumbering"""
    a, b, c = await _places(place_repo, "A", "B", "C")
    await trip_place_repo.add_place_to_trip(sample_trip.id, a.id, 10)
    eb = await trip_place_repo.add_place_to_trip(sample_trip.id, b.id, 20)
    await trip_place_repo.add_place_to_trip(sample_trip.id, c.id, 30)

    entries = await trip_place_repo.move_place(sample_trip.id, eb.id, MOVE_UP)
    assert [e.place.name for e in entries] == ["B", "A", "C"]
    assert [e.order for e in entries] == [1, 2, 3]

    entries = await trip_place_repo.move_place(sample_trip.id, eb.id, MOVE_DOWN)
    assert [e.place.name for e in entries] == ["A", "B", "C"]


@pytest.mark.asyncio
async def test_move_place_at_edges_is_noop(trip_place_repo, place_repo, sample_trip):
    a, b = await _places(place_repo, "A", "B")
    ea = await trip_place_repo.add_place_to_trip(sample_trip.id, a.id, 4)
    eb = await trip_place_repo.add_place_to_trip(sample_trip.id, b.id, 7)

    entries = await trip_place_repo.move_place(sample_trip.id, ea.id, MOVE_UP)
    assert [(e.id, e.order) for e in entries] == [(ea.id, 4), (eb.id, 7)]

    entries = await trip_place_repo.move_place(sample_trip.id, eb.id, MOVE_DOWN)
    assert [(e.id, e.order) for e in entries] == [(ea.id, 4), (eb.id, 7)]

    with pytest.raises(ValidationFailure):
        await trip_place_repo.move_place(sample_trip.id, ea.id, "sideways")
    with pytest.raises(NotFoundError):
        await trip_place_repo.move_place(sample_trip.id, "missing", MOVE_UP)


@pytest.mark.asyncio
async def test_sync_trip_places(trip_place_repo, place_repo, sample_trip):
    """Removed places are dropped, kept entries keep state, new ones go last"""
    a, b, c, d = await _places(place_repo, "A", "B", "C", "D")
    ea = await trip_place_repo.append_place(sample_trip.id, a.id)
    await trip_place_repo.append_place(sample_trip.id, b.id)
    await trip_place_repo.mark_as_visited(ea.id, "2024-06-01", "Great view")

    entries = await trip_place_repo.sync_trip_places(sample_trip.id, [d.id, a.id, c.id])

    assert [e.place.name for e in entries] == ["A", "D", "C"]
    assert [e.order for e in entries] == [1, 3, 4]
    assert entries[0].id == ea.id
    assert entries[0].visited is True
    assert entries[0].notes == "Great view"


@pytest.mark.asyncio
async def test_sync_trip_places_missing_references(trip_place_repo, sample_trip, sample_place):
    with pytest.raises(NotFoundError):
        await trip_place_repo.sync_trip_places("missing", [sample_place.id])
    with pytest.raises(NotFoundError):
        await trip_place_repo.sync_trip_places(sample_trip.id, [sample_place.id, "missing"])

    assert await trip_place_repo.get_trip_places(sample_trip.id) == []


@pytest.mark.asyncio
async def test_mark_as_visited(trip_place_repo, sample_trip, sample_place):
    """Test the visited state and its notes"""
    entry = await trip_place_repo.append_place(sample_trip.id, sample_place.id)

    visited = await trip_place_repo.mark_as_visited(entry.id, notes="Crowded")
    assert visited.visited is True
    assert visited.visit_date is not None
    assert visited.notes == "Crowded"

    again = await trip_place_repo.mark_as_visited(entry.id, visit_date="2024-06-02")
    assert again.visit_date == "2024-06-02"
    assert again.notes == "Crowded"

    pending = await trip_place_repo.mark_as_not_visited(entry.id)
    assert pending.visited is False
    assert pending.visit_date is None
    assert pending.notes == "Crowded"


@pytest.mark.asyncio
async def test_mark_missing_entry(trip_place_repo):
    with pytest.raises(NotFoundError):
        await trip_place_repo.mark_as_visited("missing")


@pytest.mark.asyncio
async def test_update_entry(trip_place_repo, sample_trip, sample_place):
    entry = await trip_place_repo.append_place(sample_trip.id, sample_place.id)

    updated = await trip_place_repo.update(entry.id, TripPlaceUpdate(notes="Bring cash", order=3))
    assert updated.notes == "Bring cash"
    assert updated.order == 3

    with pytest.raises(ValidationFailure):
        await trip_place_repo.update(entry.id, TripPlaceUpdate(visited=None))


@pytest.mark.asyncio
async def test_update_entry_blank_text_clears(trip_place_repo, sample_trip, sample_place):
    entry = await trip_place_repo.append_place(sample_trip.id, sample_place.id)
    await trip_place_repo.mark_as_visited(entry.id, "2024-06-01", "Bring cash")

    updated = await trip_place_repo.update(entry.id, TripPlaceUpdate(notes="", visit_date="  "))

    assert updated.notes is None
    assert updated.visit_date is None


@pytest.mark.asyncio
async def test_get_next_place(trip_place_repo, place_repo, sample_trip):
    """Next place is the lowest-order unvisited entry"""
    a, b, c = await _places(place_repo, "A", "B", "C")
    ea = await trip_place_repo.append_place(sample_trip.id, a.id)
    eb = await trip_place_repo.append_place(sample_trip.id, b.id)
    ec = await trip_place_repo.append_place(sample_trip.id, c.id)

    await trip_place_repo.mark_as_visited(ea.id)
    assert (await trip_place_repo.get_next_place(sample_trip.id)).id == eb.id

    await trip_place_repo.mark_as_visited(eb.id)
    await trip_place_repo.mark_as_visited(ec.id)
    assert await trip_place_repo.get_next_place(sample_trip.id) is None


@pytest.mark.asyncio
async def test_get_next_place_empty_trip(trip_place_repo, sample_trip):
    assert await trip_place_repo.get_next_place(sample_trip.id) is None


@pytest.mark.asyncio
async def test_get_progress(trip_place_repo, place_repo, sample_trip):
    a, b = await _places(place_repo, "A", "B")
    ea = await trip_place_repo.append_place(sample_trip.id, a.id)
    await trip_place_repo.append_place(sample_trip.id, b.id)
    await trip_place_repo.mark_as_visited(ea.id)

    progress = await trip_place_repo.get_progress(sample_trip.id)

    assert progress.total == 2
    assert progress.visited == 1
    assert progress.remaining == 1
    assert progress.ratio == 0.5


@pytest.mark.asyncio
async def test_remove_place_from_trip_keeps_place(trip_place_repo, place_repo, sample_trip, sample_place):
    entry = await trip_place_repo.append_place(sample_trip.id, sample_place.id)

    assert await trip_place_repo.remove_place_from_trip(entry.id) is True
    assert await trip_place_repo.remove_place_from_trip(entry.id) is False
    assert await trip_place_repo.get_by_id(entry.id) is None
    assert await place_repo.get_by_id(sample_place.id) is not None
