"""
TripPlace model: ordered, stateful membership of a place in a trip
"""
from sqlalchemy import Column, String, Integer, Text, ForeignKey, Index
from sqlalchemy.orm import relationship

from gonext.core.db import Base, IntFlag


class TripPlace(Base):
    __tablename__ = "trip_places"

    id = Column(String, primary_key=True)
    trip_id = Column("tripId", String, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    place_id = Column("placeId", String, ForeignKey("places.id", ondelete="CASCADE"), nullable=False)
    order = Column("order", Integer, nullable=False)
    visited = Column(IntFlag, nullable=False, default=False, server_default="0")
    visit_date = Column("visitDate", String, nullable=True)
    notes = Column(Text, nullable=True)

    # Relationships
    place = relationship("Place", lazy="raise")

    __table_args__ = (
        Index("idx_trip_places_tripId", "tripId"),
        Index("idx_trip_places_placeId", "placeId"),
        Index("idx_trip_places_order", "tripId", "order"),
    )
