"""Distance and map link helpers for places with coordinates."""
import math
from typing import Optional

from gonext.core.exceptions import ValidationFailure
from gonext.core.validation import parse_coordinates

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate distance between two points in kilometers."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlam = math.radians(lon2 - lon1)

    a = (
        math.sin(dphi / 2) ** 2 +
        math.cos(phi1) * math.cos(phi2) * math.sin(dlam / 2) ** 2
    )

    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def distance_to_place(place, latitude: float, longitude: float) -> Optional[float]:
    """Distance in km from (latitude, longitude) to a place, None if it has no coordinates."""
    coords = parse_coordinates(place.dd)
    if coords is None:
        return None
    return haversine_km(latitude, longitude, coords[0], coords[1])


def _require_coordinates(dd: Optional[str]):
    coords = parse_coordinates(dd)
    if coords is None:
        raise ValidationFailure("Coordinates are not set", field="dd")
    return coords


def maps_search_url(dd: Optional[str]) -> str:
    lat, lon = _require_coordinates(dd)
    return f"https://www.google.com/maps/search/?api=1&query={lat},{lon}"


def navigator_url(dd: Optional[str]) -> str:
    lat, lon = _require_coordinates(dd)
    return f"geo:{lat},{lon}?q={lat},{lon}"
