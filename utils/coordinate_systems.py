# utils/coordinate_systems.py
"""
UTM zone helpers and a pyproj-backed reference projection.

The reference projection is used to audit the series projection in
core.projection: it goes through PROJ with the official EPSG definitions
for WGS84 / UTM.
"""

import math
from functools import lru_cache
from typing import Tuple

from pyproj import Transformer

from constants import (
    DEFAULT_EPSG_NORTH_BASE,
    DEFAULT_EPSG_SOUTH_BASE,
    WGS84_EPSG
)
from core.projection import project, utm_zone
from utils.logger import get_logger

logger = get_logger(__name__)


def detect_utm_zone(longitude: float) -> int:
    """
    UTM zone for a longitude.

    Args:
        longitude: Longitude in decimal degrees

    Returns:
        Zone number (1-60 for longitudes in [-180, 180))
    """
    return utm_zone(longitude)


def detect_hemisphere(latitude: float) -> str:
    """Return "Norte" for latitude >= 0, "Sur" otherwise."""
    return "Norte" if latitude >= 0 else "Sur"


def get_utm_epsg(zone: int, hemisphere: str) -> int:
    """
    Get EPSG code for a UTM zone and hemisphere.

    Args:
        zone: UTM zone (1-60)
        hemisphere: "Norte" or "Sur"

    Returns:
        EPSG code
    """
    if hemisphere.lower() in ['norte', 'north', 'n']:
        return DEFAULT_EPSG_NORTH_BASE + zone
    else:
        return DEFAULT_EPSG_SOUTH_BASE + zone


@lru_cache(maxsize=None)
def _geographic_to_utm_transformer(epsg: int) -> Transformer:
    return Transformer.from_crs(f"EPSG:{WGS84_EPSG}", f"EPSG:{epsg}", always_xy=True)


def reference_utm(latitude: float, longitude: float) -> Tuple[float, float]:
    """
    Project with PROJ into the UTM zone that core.projection would pick.

    Args:
        latitude: Latitude in decimal degrees
        longitude: Longitude in decimal degrees

    Returns:
        (easting, northing) in meters
    """
    epsg = get_utm_epsg(detect_utm_zone(longitude), detect_hemisphere(latitude))
    transformer = _geographic_to_utm_transformer(epsg)
    # always_xy=True: input is (lon, lat), output is (easting, northing)
    easting, northing = transformer.transform(longitude, latitude)
    return easting, northing


def projection_discrepancy(latitude: float, longitude: float) -> float:
    """
    Planar distance in meters between the series projection and PROJ.

    Args:
        latitude: Latitude in decimal degrees
        longitude: Longitude in decimal degrees

    Returns:
        Distance in meters
    """
    projected = project(latitude, longitude)
    ref_easting, ref_northing = reference_utm(latitude, longitude)
    distance = math.hypot(projected.easting - ref_easting, projected.northing - ref_northing)
    logger.debug(
        f"Projection audit ({latitude}, {longitude}): zone {projected.grid_zone}, "
        f"discrepancy {distance:.3f} m"
    )
    return distance
