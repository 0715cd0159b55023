"""
ORM models for the journal tables.

Booleans are stored as INTEGER 0/1 through IntFlag, dates as ISO-8601 strings.
"""

from .place import Place
from .trip import Trip
from .trip_place import TripPlace
from .photo import PlacePhoto

__all__ = ["Place", "Trip", "TripPlace", "PlacePhoto"]
