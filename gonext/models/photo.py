"""
PlacePhoto model: an on-device image attached to a place or to one visit
"""
from sqlalchemy import Column, String, ForeignKey, Index

from gonext.core.db import Base


class PlacePhoto(Base):
    __tablename__ = "place_photos"

    id = Column(String, primary_key=True)
    place_id = Column("placeId", String, ForeignKey("places.id", ondelete="CASCADE"), nullable=False)
    # NULL for a general place photo, set for a photo taken during a specific visit
    trip_place_id = Column("tripPlaceId", String, ForeignKey("trip_places.id", ondelete="CASCADE"), nullable=True)
    file_path = Column("filePath", String, nullable=False)
    created_at = Column("createdAt", String, nullable=False)

    __table_args__ = (
        Index("idx_place_photos_placeId", "placeId"),
        Index("idx_place_photos_tripPlaceId", "tripPlaceId"),
    )
