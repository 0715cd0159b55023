"""
Place model: a point of interest catalogued independently of any trip
"""
from sqlalchemy import Column, String, Text

from gonext.core.db import Base, IntFlag


class Place(Base):
    __tablename__ = "places"

    id = Column(String, primary_key=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    visit_later = Column("visitlater", IntFlag, nullable=False, default=False, server_default="0")
    liked = Column(IntFlag, nullable=False, default=False, server_default="0")
    dd = Column(String, nullable=True)  # "latitude,longitude"
    created_at = Column("createdAt", String, nullable=False)
