"""
Trip Place Service - Itinerary membership, ordering, visits and the next place
"""
import logging
from typing import Iterable, List, Optional, Sequence, Union

from sqlalchemy import select, update, delete, func, literal_column
from sqlalchemy.orm import selectinload

from gonext.core.db import Database
from gonext.core.exceptions import NotFoundError, ValidationFailure
from gonext.core.ids import generate_id, current_date
from gonext.core.validation import validate_order
from gonext.models.place import Place
from gonext.models.trip import Trip
from gonext.models.trip_place import TripPlace
from gonext.schemas.base import build
from gonext.schemas.trip_place import (
    TripPlaceRead,
    TripPlaceWithPlace,
    TripPlaceUpdate,
    OrderAssignment,
    TripProgress,
)

logger = logging.getLogger(__name__)

# equal order values fall back to insertion order
_ITINERARY_ORDER = (TripPlace.order.asc(), literal_column("trip_places.rowid").asc())

MOVE_UP = "up"
MOVE_DOWN = "down"


class TripPlaceRepository:
    """Manages the ordered places of each trip"""

    def __init__(self, db: Database):
        self.db = db

    @staticmethod
    async def _require(session, model, entity: str, entity_id: str):
        row = await session.get(model, entity_id)
        if row is None:
            raise NotFoundError(entity, entity_id)
        return row

    async def add_place_to_trip(self, trip_id: str, place_id: str, order: int) -> TripPlaceRead:
        """
        Add a place to a trip at the given position

        The caller chooses the order value (usually next_order()); nothing is renumbered.

        Raises:
            ValidationFailure: If order is not a positive integer
            NotFoundError: If the trip or place does not exist
        """
        validate_order(order)

        async with self.db.session() as session:
            await self._require(session, Trip, "Trip", trip_id)
            await self._require(session, Place, "Place", place_id)

            trip_place = TripPlace(
                id=generate_id(),
                trip_id=trip_id,
                place_id=place_id,
                order=order,
                visited=False,
                visit_date=None,
                notes=None,
            )
            session.add(trip_place)
            await session.commit()

        logger.info("Added place %s to trip %s at position %d", place_id, trip_id, order)
        return TripPlaceRead.model_validate(trip_place)

    async def next_order(self, trip_id: str) -> int:
        """Order value that places a new entry after every existing one"""
        stmt = select(func.max(TripPlace.order)).where(TripPlace.trip_id == trip_id)
        async with self.db.session() as session:
            result = await session.execute(stmt)
            max_order = result.scalar()
        return (max_order or 0) + 1

    async def append_place(self, trip_id: str, place_id: str) -> TripPlaceRead:
        """Add a place after the last entry of the trip"""
        return await self.add_place_to_trip(trip_id, place_id, await self.next_order(trip_id))

    async def get_trip_places(self, trip_id: str) -> List[TripPlaceWithPlace]:
        """
        Get the itinerary of a trip

        Args:
            trip_id: Trip ID

        Returns:
            Entries sorted by order, each with its place

        Raises:
            NotFoundError: If an entry references a missing place
        """
        stmt = (
            select(TripPlace)
            .where(TripPlace.trip_id == trip_id)
            .options(selectinload(TripPlace.place))
            .order_by(*_ITINERARY_ORDER)
        )
        async with self.db.session() as session:
            result = await session.execute(stmt)
            rows = result.scalars().all()

        entries = []
        for row in rows:
            if row.place is None:
                raise NotFoundError("Place", row.place_id)
            entries.append(TripPlaceWithPlace.model_validate(row))
        return entries

    async def get_by_id(self, trip_place_id: str) -> Optional[TripPlaceRead]:
        async with self.db.session() as session:
            row = await session.get(TripPlace, trip_place_id)
        if row is None:
            return None
        return TripPlaceRead.model_validate(row)

    async def update(self, trip_place_id: str, data: TripPlaceUpdate) -> TripPlaceRead:
        """
        Merge the supplied fields onto an itinerary entry

        Raises:
            NotFoundError: If the entry does not exist
        """
        async with self.db.session() as session:
            row = await self._require(session, TripPlace, "TripPlace", trip_place_id)
            for field, value in data.model_dump(exclude_unset=True).items():
                if field in ("order", "visited") and value is None:
                    raise ValidationFailure(f"{field} cannot be empty", field=field)
                setattr(row, field, value)
            await session.commit()

        return TripPlaceRead.model_validate(row)

    async def update_trip_places_order(
        self,
        trip_id: str,
        orders: Sequence[Union[OrderAssignment, dict]],
    ) -> int:
        """
        Reassign positions of itinerary entries

        The request is checked as a whole before any write: every order must be
        positive and no id or order value may appear twice. Assignments are then
        applied one after another in a single transaction; ids that do not belong
        to the trip are skipped.

        Returns:
            Number of entries updated
        """
        assignments = [
            item if isinstance(item, OrderAssignment) else build(OrderAssignment, item)
            for item in orders
        ]
        _reject_duplicates([a.id for a in assignments], "id")
        _reject_duplicates([a.order for a in assignments], "order")

        updated = 0
        async with self.db.session() as session:
            for item in assignments:
                result = await session.execute(
                    update(TripPlace)
                    .where(TripPlace.id == item.id, TripPlace.trip_id == trip_id)
                    .values(order=item.order)
                    .execution_options(synchronize_session=False)
                )
                updated += result.rowcount
            await session.commit()

        logger.info("Reordered %d places in trip %s", updated, trip_id)
        return updated

    async def move_place(self, trip_id: str, trip_place_id: str, direction: str) -> List[TripPlaceWithPlace]:
        """
        Swap an entry with its neighbour and renumber the trip 1..n

        Moving the first entry up or the last entry down changes nothing.

        Raises:
            ValidationFailure: If direction is not "up" or "down"
            NotFoundError: If the entry is not part of the trip
        """
        if direction not in (MOVE_UP, MOVE_DOWN):
            raise ValidationFailure(f"Unknown direction '{direction}'", field="direction")

        entries = await self.get_trip_places(trip_id)
        ids = [e.id for e in entries]
        if trip_place_id not in ids:
            raise NotFoundError("TripPlace", trip_place_id)

        current_index = ids.index(trip_place_id)
        new_index = current_index - 1 if direction == MOVE_UP else current_index + 1
        if new_index < 0 or new_index >= len(ids):
            return entries

        ids[current_index], ids[new_index] = ids[new_index], ids[current_index]
        await self.update_trip_places_order(
            trip_id,
            [OrderAssignment(id=entry_id, order=position) for position, entry_id in enumerate(ids, start=1)],
        )
        return await self.get_trip_places(trip_id)

    async def sync_trip_places(self, trip_id: str, place_ids: Iterable[str]) -> List[TripPlaceWithPlace]:
        """
        Make the trip contain exactly the given places

        Entries whose place is no longer selected are removed; newly selected
        places are appended after the current highest order, in the given order.
        Existing entries keep their order, visit state and notes.

        Raises:
            NotFoundError: If the trip or a newly selected place does not exist
        """
        selected = list(dict.fromkeys(place_ids))

        async with self.db.session() as session:
            await self._require(session, Trip, "Trip", trip_id)
            result = await session.execute(
                select(TripPlace).where(TripPlace.trip_id == trip_id).order_by(*_ITINERARY_ORDER)
            )
            existing = result.scalars().all()

            existing_place_ids = {row.place_id for row in existing}
            max_order = max((row.order for row in existing), default=0)

            removed_ids = [row.id for row in existing if row.place_id not in selected]
            if removed_ids:
                await session.execute(
                    delete(TripPlace)
                    .where(TripPlace.id.in_(removed_ids))
                    .execution_options(synchronize_session=False)
                )

            new_place_ids = [pid for pid in selected if pid not in existing_place_ids]
            for offset, place_id in enumerate(new_place_ids, start=1):
                await self._require(session, Place, "Place", place_id)
                session.add(TripPlace(
                    id=generate_id(),
                    trip_id=trip_id,
                    place_id=place_id,
                    order=max_order + offset,
                    visited=False,
                ))

            await session.commit()

        logger.info(
            "Synced trip %s: %d removed, %d added",
            trip_id, len(removed_ids), len(new_place_ids),
        )
        return await self.get_trip_places(trip_id)

    async def mark_as_visited(
        self,
        trip_place_id: str,
        visit_date: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> TripPlaceRead:
        """
        Mark an entry as visited

        Args:
            trip_place_id: Itinerary entry ID
            visit_date: Visit timestamp, defaults to now
            notes: Replaces existing notes when given, otherwise they are kept
        """
        data = {"visited": True, "visit_date": visit_date or current_date()}
        if notes:
            data["notes"] = notes
        entry = await self.update(trip_place_id, TripPlaceUpdate(**data))
        logger.info("Trip place %s marked as visited", trip_place_id)
        return entry

    async def mark_as_not_visited(self, trip_place_id: str) -> TripPlaceRead:
        """Return an entry to the pending state; notes are kept"""
        entry = await self.update(trip_place_id, TripPlaceUpdate(visited=False, visit_date=None))
        logger.info("Trip place %s marked as not visited", trip_place_id)
        return entry

    async def get_next_place(self, trip_id: str) -> Optional[TripPlaceWithPlace]:
        """
        Get the lowest-order entry that has not been visited

        Returns:
            Next entry or None when every place has been visited
        """
        for entry in await self.get_trip_places(trip_id):
            if not entry.visited:
                return entry
        return None

    async def get_progress(self, trip_id: str) -> TripProgress:
        """Count the trip's entries and how many are visited"""
        async with self.db.session() as session:
            total = await session.execute(
                select(func.count(TripPlace.id)).where(TripPlace.trip_id == trip_id)
            )
            visited = await session.execute(
                select(func.count(TripPlace.id)).where(
                    TripPlace.trip_id == trip_id,
                    TripPlace.visited == True,  # noqa: E712
                )
            )
            return TripProgress(
                trip_id=trip_id,
                total=total.scalar() or 0,
                visited=visited.scalar() or 0,
            )

    async def remove_place_from_trip(self, trip_place_id: str) -> bool:
        """
        Delete an itinerary entry; the referenced place is kept.

        Returns:
            True if a row was removed
        """
        async with self.db.session() as session:
            result = await session.execute(delete(TripPlace).where(TripPlace.id == trip_place_id))
            await session.commit()

        deleted = result.rowcount > 0
        if deleted:
            logger.info("Removed trip place %s", trip_place_id)
        return deleted


def _reject_duplicates(values: list, field: str) -> None:
    seen = set()
    for value in values:
        if value in seen:
            raise ValidationFailure(f"Duplicate {field} {value} in order update", field=field)
        seen.add(value)
