# utils/validators.py
"""
Validation utilities for GeoSmart Mapper.
Provides functions to validate location samples and point metadata
before they reach the projector or the point collection.
"""

import math
from typing import Tuple, Optional
from constants import UTM_MIN_LATITUDE, UTM_MAX_LATITUDE
from core.models import GeographicPosition, PointCategory
from core.exceptions import InvalidCoordinateError


def _as_finite_float(field_name: str, value) -> float:
    if isinstance(value, bool):
        raise InvalidCoordinateError(field_name, value, "Debe ser numérico")
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        raise InvalidCoordinateError(field_name, value, "Debe ser numérico")

    if not math.isfinite(parsed):
        raise InvalidCoordinateError(field_name, value, "Debe ser un número finito")

    return parsed


def validate_position(latitude, longitude, accuracy=0.0) -> GeographicPosition:
    """
    Validate a raw location sample.

    Args:
        latitude: Latitude in decimal degrees (-90 to 90)
        longitude: Longitude in decimal degrees (-180 to 180)
        accuracy: Horizontal accuracy in meters (>= 0)

    Returns:
        GeographicPosition built from the parsed values

    Raises:
        InvalidCoordinateError: If any value is non-numeric, non-finite or out of range
    """
    lat = _as_finite_float("latitude", latitude)
    lon = _as_finite_float("longitude", longitude)
    acc = _as_finite_float("accuracy", accuracy)

    if not -90 <= lat <= 90:
        raise InvalidCoordinateError("latitude", latitude, "Latitud debe estar entre -90 y 90")

    if not -180 <= lon <= 180:
        raise InvalidCoordinateError("longitude", longitude, "Longitud debe estar entre -180 y 180")

    if acc < 0:
        raise InvalidCoordinateError("accuracy", accuracy, "La precisión no puede ser negativa")

    return GeographicPosition(latitude=lat, longitude=lon, accuracy=acc)


def validate_decimal_degrees(value, is_longitude: bool = False) -> Tuple[bool, Optional[float]]:
    """
    Validate decimal degrees coordinate.

    Args:
        value: Value to validate (number or string)
        is_longitude: True if this is longitude (-180 to 180), False for latitude (-90 to 90)

    Returns:
        Tuple of (is_valid, parsed_value)
    """
    try:
        parsed = _as_finite_float("longitude" if is_longitude else "latitude", value)
    except InvalidCoordinateError:
        return False, None

    limit = 180 if is_longitude else 90
    if -limit <= parsed <= limit:
        return True, parsed

    return False, None


def is_utm_latitude(latitude: float) -> bool:
    """True when the latitude lies inside the UTM band range (-80 to 84)."""
    return UTM_MIN_LATITUDE <= latitude <= UTM_MAX_LATITUDE


def normalize_category(label) -> PointCategory:
    """
    Map a free-form label to a known category.

    Unrecognized or empty labels fall back to PointCategory.OTHER.
    """
    if isinstance(label, PointCategory):
        return label

    if not label or not isinstance(label, str):
        return PointCategory.OTHER

    label = label.strip()
    if label in PointCategory.labels():
        return PointCategory(label)

    return PointCategory.OTHER


def validate_category(label) -> Tuple[bool, Optional[PointCategory]]:
    """
    Strict membership check for a category label.

    Returns:
        Tuple of (is_valid, category)
    """
    if isinstance(label, PointCategory):
        return True, label

    if isinstance(label, str) and label.strip() in PointCategory.labels():
        return True, PointCategory(label.strip())

    return False, None
