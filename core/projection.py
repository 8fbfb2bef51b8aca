# core/projection.py
"""
Forward Transverse Mercator projection (WGS84 -> UTM).

Closed-form series expansion as used for UTM grid coordinates. The function
is pure: it does not validate its input, so NaN or infinite values propagate
into the result instead of raising. Validate at the boundary with
``utils.validators.validate_position`` when strict rejection is needed.
"""

import math

from constants import (
    WGS84_SEMI_MAJOR_AXIS,
    WGS84_ECCENTRICITY_SQ,
    UTM_SCALE_FACTOR,
    UTM_FALSE_EASTING,
    UTM_FALSE_NORTHING_SOUTH,
    UTM_BAND_LETTERS,
    UTM_DEFAULT_BAND,
)
from core.models import ProjectedCoordinate

K0 = UTM_SCALE_FACTOR
E = WGS84_ECCENTRICITY_SQ
E_P2 = E / (1 - E)
R = WGS84_SEMI_MAJOR_AXIS

# Meridional arc coefficients
M1 = 1 - E / 4 - 3 * E ** 2 / 64 - 5 * E ** 3 / 256
M2 = 3 * E / 8 + 3 * E ** 2 / 32 + 45 * E ** 3 / 1024
M3 = 15 * E ** 2 / 256 + 45 * E ** 3 / 1024
M4 = 35 * E ** 3 / 3072


def _floor(value: float):
    """math.floor returning NaN for NaN/Infinity instead of raising."""
    if not math.isfinite(value):
        return math.nan
    return math.floor(value)


def _round_hundredths(value: float) -> float:
    # Half-up rounding; round() would round half to even.
    scaled = value * 100 + 0.5
    if not math.isfinite(scaled):
        return math.nan if math.isnan(scaled) else value
    return math.floor(scaled) / 100


def utm_zone(longitude: float):
    """UTM zone number for a longitude in degrees."""
    return _floor((longitude + 180) / 6) + 1


def central_meridian(zone) -> float:
    """Central meridian, in degrees, of a UTM zone."""
    return 6 * zone - 183


def latitude_band(latitude: float) -> str:
    """
    Latitude band letter for a latitude in degrees.

    Indexes outside the band string fall back to 'X'.
    """
    index = _floor(latitude / 8 + 10)
    if isinstance(index, float) or not (0 <= index < len(UTM_BAND_LETTERS)):
        return UTM_DEFAULT_BAND
    return UTM_BAND_LETTERS[index]


def project(latitude: float, longitude: float) -> ProjectedCoordinate:
    """
    Convert a WGS84 latitude/longitude to UTM.

    Args:
        latitude: Latitude in decimal degrees (UTM is defined for -80..84)
        longitude: Longitude in decimal degrees

    Returns:
        ProjectedCoordinate with easting/northing rounded to hundredths of a meter
    """
    zone = utm_zone(longitude)
    zone_cm = central_meridian(zone)

    lat_rad = math.radians(latitude)
    lon_rad = math.radians(longitude)
    zone_cm_rad = math.radians(zone_cm)

    sin_lat = math.sin(lat_rad) if math.isfinite(lat_rad) else math.nan
    cos_lat = math.cos(lat_rad) if math.isfinite(lat_rad) else math.nan
    tan_lat = math.tan(lat_rad) if math.isfinite(lat_rad) else math.nan

    n = R / math.sqrt(1 - E * sin_lat * sin_lat)
    t = tan_lat * tan_lat
    c = E_P2 * cos_lat * cos_lat
    a = cos_lat * (lon_rad - zone_cm_rad)

    m = R * (
        M1 * lat_rad
        - M2 * math.sin(2 * lat_rad)
        + M3 * math.sin(4 * lat_rad)
        - M4 * math.sin(6 * lat_rad)
    ) if math.isfinite(lat_rad) else math.nan

    easting = K0 * n * (
        a
        + (1 - t + c) * a * a * a / 6
        + (5 - 18 * t + t * t + 72 * c - 58 * E_P2) * a * a * a * a * a / 120
    ) + UTM_FALSE_EASTING

    northing = K0 * (
        m
        + n * tan_lat * (
            a * a / 2
            + (5 - t + 9 * c + 4 * c * c) * a * a * a * a / 24
            + (61 - 58 * t + t * t + 600 * c - 330 * E_P2) * a * a * a * a * a * a / 720
        )
    )

    if latitude < 0:
        northing += UTM_FALSE_NORTHING_SOUTH

    return ProjectedCoordinate(
        easting=_round_hundredths(easting),
        northing=_round_hundredths(northing),
        zone=zone,
        band=latitude_band(latitude),
    )
