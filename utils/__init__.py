# utils/__init__.py
"""
Utility modules for GeoSmart Mapper.
"""

from .logger import get_logger, setup_logging
from .validators import (
    validate_position,
    validate_decimal_degrees,
    validate_category,
    normalize_category,
    is_utm_latitude
)
from .error_handler import handle_errors, log_and_describe_error
from .error_messages import get_error_message, format_error_message

# Export coordinate system utilities
from .coordinate_systems import (
    detect_utm_zone,
    detect_hemisphere,
    get_utm_epsg,
    reference_utm,
    projection_discrepancy
)

__all__ = [
    # Logger
    'get_logger',
    'setup_logging',
    # Validators
    'validate_position',
    'validate_decimal_degrees',
    'validate_category',
    'normalize_category',
    'is_utm_latitude',
    # Error handling
    'handle_errors',
    'log_and_describe_error',
    'get_error_message',
    'format_error_message',
    # Coordinate systems
    'detect_utm_zone',
    'detect_hemisphere',
    'get_utm_epsg',
    'reference_utm',
    'projection_discrepancy'
]
