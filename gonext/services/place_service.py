"""
Place Service - CRUD over catalogued places
"""
import logging
from typing import Optional, List

from sqlalchemy import select, delete, func, literal_column

from gonext.core.db import Database
from gonext.core.exceptions import NotFoundError
from gonext.core.ids import generate_id, current_timestamp
from gonext.models.place import Place
from gonext.schemas.base import build
from gonext.schemas.place import PlaceCreate, PlaceUpdate, PlaceRead

logger = logging.getLogger(__name__)

_NEWEST_FIRST = (Place.created_at.desc(), literal_column("places.rowid").desc())


class PlaceRepository:
    """Manages place CRUD operations"""

    def __init__(self, db: Database):
        self.db = db

    async def create(self, place_data: PlaceCreate) -> PlaceRead:
        """
        Create a new place

        Args:
            place_data: Validated place fields

        Returns:
            Created place with generated id and timestamp
        """
        place = Place(
            id=generate_id(),
            name=place_data.name,
            description=place_data.description,
            visit_later=place_data.visit_later,
            liked=place_data.liked,
            dd=place_data.dd,
            created_at=current_timestamp(),
        )
        async with self.db.session() as session:
            session.add(place)
            await session.commit()

        logger.info("Created place %s", place.id)
        return PlaceRead.model_validate(place)

    async def get_by_id(self, place_id: str) -> Optional[PlaceRead]:
        async with self.db.session() as session:
            place = await session.get(Place, place_id)
        if place is None:
            return None
        return PlaceRead.model_validate(place)

    async def get_all(self) -> List[PlaceRead]:
        """All places, newest first"""
        return await self.get_filtered()

    async def get_filtered(
        self,
        visit_later: Optional[bool] = None,
        liked: Optional[bool] = None,
        search: Optional[str] = None,
    ) -> List[PlaceRead]:
        """
        List places with optional filters

        Args:
            visit_later: Only places with this "visit later" flag
            liked: Only places with this "liked" flag
            search: Case-insensitive substring of the place name

        Returns:
            Matching places, newest first
        """
        stmt = select(Place)

        if visit_later is not None:
            stmt = stmt.where(Place.visit_later == visit_later)
        if liked is not None:
            stmt = stmt.where(Place.liked == liked)
        if search:
            stmt = stmt.where(Place.name.icontains(search, autoescape=True))

        stmt = stmt.order_by(*_NEWEST_FIRST)
        async with self.db.session() as session:
            result = await session.execute(stmt)
            places = result.scalars().all()
        return [PlaceRead.model_validate(p) for p in places]

    async def update(self, place_id: str, place_data: PlaceUpdate) -> PlaceRead:
        """
        Merge the supplied fields onto an existing place

        Raises:
            NotFoundError: If the place does not exist
            ValidationFailure: If the merged place is invalid
        """
        async with self.db.session() as session:
            place = await session.get(Place, place_id)
            if place is None:
                raise NotFoundError("Place", place_id)

            merged = PlaceRead.model_validate(place).model_dump(exclude={"id", "created_at"})
            merged.update(place_data.model_dump(exclude_unset=True))
            validated = build(PlaceCreate, merged)

            for field, value in validated.model_dump().items():
                setattr(place, field, value)

            await session.commit()

        logger.info("Updated place %s", place_id)
        return PlaceRead.model_validate(place)

    async def delete(self, place_id: str) -> bool:
        """
        Delete a place. Its photos and itinerary entries go with it
        through the ON DELETE CASCADE foreign keys.

        Returns:
            True if a row was removed
        """
        async with self.db.session() as session:
            result = await session.execute(delete(Place).where(Place.id == place_id))
            await session.commit()

        deleted = result.rowcount > 0
        if deleted:
            logger.info("Deleted place %s", place_id)
        return deleted

    async def count(self) -> int:
        async with self.db.session() as session:
            result = await session.execute(select(func.count(Place.id)))
            return result.scalar() or 0
