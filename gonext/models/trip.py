"""
Trip model: an itinerary with optional dates and the "current" flag
"""
from sqlalchemy import Column, String, Text, Index

from gonext.core.db import Base, IntFlag


class Trip(Base):
    """
    Trip represents a user-defined itinerary.
    At most one row has current = 1.
    """
    __tablename__ = "trips"

    id = Column(String, primary_key=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    start_date = Column("startDate", String, nullable=True)  # YYYY-MM-DD
    end_date = Column("endDate", String, nullable=True)
    current = Column(IntFlag, nullable=False, default=False, server_default="0")
    created_at = Column("createdAt", String, nullable=False)

    __table_args__ = (
        Index("idx_trips_current", "current"),
    )
