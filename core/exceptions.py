"""
Custom exception classes for GeoSmart Mapper.

These exceptions provide better error categorization and enable
more specific error handling throughout the application.
"""


class GeoSmartError(Exception):
    """Base exception for all GeoSmart errors."""

    def __init__(self, message: str, details: str = None):
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self):
        if self.details:
            return f"{self.message}\nDetalles: {self.details}"
        return self.message


class InvalidCoordinateError(GeoSmartError):
    """Raised when a geographic position is rejected at the boundary."""

    def __init__(self, field_name: str, value, reason: str = None):
        message = f"Coordenada inválida en '{field_name}': {value}"
        if reason:
            message += f". {reason}"
        self.field_name = field_name
        self.value = value
        super().__init__(message, details=f"{field_name}={value}")


class NoPositionError(GeoSmartError):
    """Raised when a point is captured without a current GPS fix."""
    pass


class PointNotFoundError(GeoSmartError):
    """Raised when a point id is not part of the collection."""

    def __init__(self, point_id: str):
        self.point_id = point_id
        super().__init__(f"Punto no encontrado: {point_id}", details=point_id)


class StorageError(GeoSmartError):
    """Raised when the point collection cannot be loaded or saved."""
    pass


class FileExportError(GeoSmartError):
    """Raised when file export fails."""
    pass


class InsufficientDataError(GeoSmartError):
    """Raised when insufficient data for operation."""
    pass


class ImageAnalysisError(GeoSmartError):
    """Raised when the image classification call fails for any reason."""
    pass
