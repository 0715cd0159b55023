"""
Trip Service - Manages trip lifecycle and the single "current" trip
"""
import logging
from typing import Optional, List

from sqlalchemy import select, update, delete, func, literal_column

from gonext.core.db import Database
from gonext.core.exceptions import NotFoundError
from gonext.core.ids import generate_id, current_timestamp
from gonext.models.trip import Trip
from gonext.schemas.base import build
from gonext.schemas.trip import TripCreate, TripUpdate, TripRead

logger = logging.getLogger(__name__)

_NEWEST_FIRST = (Trip.created_at.desc(), literal_column("trips.rowid").desc())


class TripRepository:
    """Manages trip CRUD operations"""

    def __init__(self, db: Database):
        self.db = db

    @staticmethod
    async def _demote_current(session, keep_id: Optional[str] = None) -> None:
        stmt = update(Trip).where(Trip.current == True).values(current=False)  # noqa: E712
        if keep_id is not None:
            stmt = stmt.where(Trip.id != keep_id)
        await session.execute(stmt)

    async def create(self, trip_data: TripCreate) -> TripRead:
        """
        Create a new trip

        A trip created as current demotes the previous current trip
        in the same transaction.

        Args:
            trip_data: Validated trip fields

        Returns:
            Created trip
        """
        trip = Trip(
            id=generate_id(),
            title=trip_data.title,
            description=trip_data.description,
            start_date=trip_data.start_date,
            end_date=trip_data.end_date,
            current=trip_data.current,
            created_at=current_timestamp(),
        )
        async with self.db.session() as session:
            if trip.current:
                await self._demote_current(session)
            session.add(trip)
            await session.commit()

        logger.info("Created trip %s (current=%s)", trip.id, trip.current)
        return TripRead.model_validate(trip)

    async def get_by_id(self, trip_id: str) -> Optional[TripRead]:
        async with self.db.session() as session:
            trip = await session.get(Trip, trip_id)
        if trip is None:
            return None
        return TripRead.model_validate(trip)

    async def get_all(self) -> List[TripRead]:
        """All trips, newest first"""
        stmt = select(Trip).order_by(*_NEWEST_FIRST)
        async with self.db.session() as session:
            result = await session.execute(stmt)
            trips = result.scalars().all()
        return [TripRead.model_validate(t) for t in trips]

    async def get_current_trip(self) -> Optional[TripRead]:
        """
        Get the trip flagged as current

        Returns:
            Current trip or None
        """
        stmt = select(Trip).where(Trip.current == True).order_by(*_NEWEST_FIRST).limit(1)  # noqa: E712
        async with self.db.session() as session:
            result = await session.execute(stmt)
            trip = result.scalar_one_or_none()
        if trip is None:
            return None
        return TripRead.model_validate(trip)

    async def update(self, trip_id: str, trip_data: TripUpdate) -> TripRead:
        """
        Merge the supplied fields onto an existing trip

        Raises:
            NotFoundError: If the trip does not exist
            ValidationFailure: If the merged trip is invalid
        """
        async with self.db.session() as session:
            trip = await session.get(Trip, trip_id)
            if trip is None:
                raise NotFoundError("Trip", trip_id)

            merged = TripRead.model_validate(trip).model_dump(exclude={"id", "created_at"})
            updates = trip_data.model_dump(exclude_unset=True)
            merged.update(updates)
            validated = build(TripCreate, merged)

            if updates.get("current") is True:
                await self._demote_current(session, keep_id=trip_id)

            for field, value in validated.model_dump().items():
                setattr(trip, field, value)

            await session.commit()

        logger.info("Updated trip %s", trip_id)
        return TripRead.model_validate(trip)

    async def set_current(self, trip_id: str) -> TripRead:
        """Make a trip the current one"""
        return await self.update(trip_id, TripUpdate(current=True))

    async def clear_current(self) -> None:
        """Leave no trip flagged as current"""
        async with self.db.session() as session:
            await self._demote_current(session)
            await session.commit()

    async def delete(self, trip_id: str) -> bool:
        """
        Delete a trip; its itinerary entries cascade.

        Returns:
            True if a row was removed
        """
        async with self.db.session() as session:
            result = await session.execute(delete(Trip).where(Trip.id == trip_id))
            await session.commit()

        deleted = result.rowcount > 0
        if deleted:
            logger.info("Deleted trip %s", trip_id)
        return deleted

    async def count(self) -> int:
        async with self.db.session() as session:
            result = await session.execute(select(func.count(Trip.id)))
            return result.scalar() or 0
