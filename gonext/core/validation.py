"""
Input validation utilities for places, trips and itinerary entries
"""
import math
import re
from datetime import date
from typing import Optional, Tuple

from gonext.core.exceptions import ValidationFailure

NAME_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 2000

_DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_required(value: Optional[str], field_name: str) -> str:
    """
    Validate that a field is present and not blank

    Args:
        value: Field value
        field_name: Name of field for error message

    Returns:
        Validated value

    Raises:
        ValidationFailure: If the value is missing or blank
    """
    if _is_blank(value):
        raise ValidationFailure(f'Field "{field_name}" is required', field=field_name)
    return value


def validate_length(value: str, min_length: int, max_length: int, field_name: str) -> str:
    """
    Validate trimmed string length

    Args:
        value: Text to validate
        min_length: Minimum allowed length
        max_length: Maximum allowed length
        field_name: Name of field for error message

    Returns:
        Validated text

    Raises:
        ValidationFailure: If the trimmed length is out of range
    """
    length = len(value.strip())

    if length < min_length:
        raise ValidationFailure(
            f'Field "{field_name}" must contain at least {min_length} characters',
            field=field_name,
        )

    if length > max_length:
        raise ValidationFailure(
            f'Field "{field_name}" must contain at most {max_length} characters',
            field=field_name,
        )

    return value


def parse_coordinates(coords: Optional[str]) -> Optional[Tuple[float, float]]:
    """
    Parse a "lat,lon" decimal degrees string

    Args:
        coords: Coordinates such as "55.7558,37.6173"

    Returns:
        (latitude, longitude) or None when no coordinates are given

    Raises:
        ValidationFailure: If the format or ranges are invalid
    """
    if _is_blank(coords):
        return None

    parts = coords.strip().split(",")
    if len(parts) != 2:
        raise ValidationFailure(
            "Invalid coordinate format. Use latitude,longitude (for example: 55.7558,37.6173)",
            field="dd",
        )

    try:
        lat = float(parts[0].strip())
        lon = float(parts[1].strip())
    except ValueError:
        raise ValidationFailure("Coordinates must be numbers", field="dd")

    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise ValidationFailure("Coordinates must be numbers", field="dd")

    if not -90.0 <= lat <= 90.0:
        raise ValidationFailure(f"Latitude {lat} out of range (must be -90 to 90)", field="dd")

    if not -180.0 <= lon <= 180.0:
        raise ValidationFailure(f"Longitude {lon} out of range (must be -180 to 180)", field="dd")

    return lat, lon


def validate_coordinates(coords: Optional[str]) -> Optional[str]:
    """
    Validate coordinates in DD (decimal degrees) format

    Empty coordinates are valid, since they are optional.

    Returns:
        Trimmed coordinates or None
    """
    if parse_coordinates(coords) is None:
        return None
    return coords.strip()


def validate_date(value: Optional[str], field_name: str = "date") -> Optional[str]:
    """
    Validate a YYYY-MM-DD calendar date

    Empty dates are valid, since they are optional.

    Raises:
        ValidationFailure: If the format is wrong or the date does not exist
    """
    if _is_blank(value):
        return None

    value = value.strip()
    if not _DATE_PATTERN.match(value):
        raise ValidationFailure(
            "Invalid date format. Use YYYY-MM-DD (for example: 2024-06-15)",
            field=field_name,
        )

    try:
        date.fromisoformat(value)
    except ValueError:
        raise ValidationFailure(f"Invalid date {value}", field=field_name)

    return value


def validate_date_range(start_date: Optional[str], end_date: Optional[str]) -> None:
    """
    Validate that start_date is not after end_date

    Passes when either date is missing.
    """
    start = validate_date(start_date, "start_date")
    end = validate_date(end_date, "end_date")
    if start is None or end is None:
        return

    if date.fromisoformat(start) > date.fromisoformat(end):
        raise ValidationFailure("Start date cannot be later than end date", field="end_date")


def validate_order(order: int) -> int:
    """Validate an itinerary position (positive integer)"""
    if isinstance(order, bool) or not isinstance(order, int):
        raise ValidationFailure("Order must be an integer", field="order")
    if order < 1:
        raise ValidationFailure(f"Order {order} must be a positive integer", field="order")
    return order


def validate_place(
    name: Optional[str],
    description: Optional[str] = None,
    coordinates: Optional[str] = None,
) -> None:
    """Validate a complete place"""
    validate_required(name, "name")
    validate_length(name, 1, NAME_MAX_LENGTH, "name")

    if description:
        validate_length(description, 0, DESCRIPTION_MAX_LENGTH, "description")

    if coordinates:
        validate_coordinates(coordinates)


def validate_trip(
    title: Optional[str],
    description: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> None:
    """Validate a complete trip"""
    validate_required(title, "title")
    validate_length(title, 1, NAME_MAX_LENGTH, "title")

    if description:
        validate_length(description, 0, DESCRIPTION_MAX_LENGTH, "description")

    validate_date(start_date, "start_date")
    validate_date(end_date, "end_date")
    validate_date_range(start_date, end_date)
