"""
User-friendly error messages for GeoSmart Mapper.

Maps exception types to short advisory messages in Spanish.
"""

from core.exceptions import (
    InvalidCoordinateError,
    NoPositionError,
    PointNotFoundError,
    StorageError,
    FileExportError,
    InsufficientDataError,
    ImageAnalysisError
)
from constants import MSG_WAITING_GPS, MSG_ANALYSIS_FAILED, MSG_NO_DATA


# Error message templates
ERROR_MESSAGES = {
    InvalidCoordinateError: {
        "title": "Posición GPS Inválida",
        "message": "La posición recibida del GPS no es válida.",
        "suggestions": [
            "Espere a que el GPS obtenga una nueva lectura",
            "Verifique que la latitud esté entre -90 y 90 y la longitud entre -180 y 180"
        ]
    },

    NoPositionError: {
        "title": "Sin Señal GPS",
        "message": MSG_WAITING_GPS,
        "suggestions": [
            "Verifique que la ubicación esté habilitada",
            "Muévase a un lugar con vista despejada del cielo"
        ]
    },

    PointNotFoundError: {
        "title": "Punto No Encontrado",
        "message": "El punto seleccionado ya no existe.",
        "suggestions": [
            "Actualice la lista de puntos"
        ]
    },

    StorageError: {
        "title": "Error de Almacenamiento",
        "message": "No se pudieron guardar o leer los puntos capturados.",
        "suggestions": [
            "Verifique que haya espacio suficiente en el dispositivo",
            "Verifique los permisos de la carpeta de datos"
        ]
    },

    FileExportError: {
        "title": "Error al Exportar Archivo",
        "message": "No se pudo exportar el archivo.",
        "suggestions": [
            "Verifique que tenga permisos de escritura en la carpeta destino",
            "Asegúrese de que haya espacio suficiente en el disco",
            "Intente exportar a una ubicación diferente"
        ]
    },

    InsufficientDataError: {
        "title": "Datos Insuficientes",
        "message": MSG_NO_DATA,
        "suggestions": [
            "Capture al menos un punto antes de exportar"
        ]
    },

    ImageAnalysisError: {
        "title": "Error de Análisis",
        "message": MSG_ANALYSIS_FAILED,
        "suggestions": [
            "Verifique su conexión a internet",
            "Llene los campos manualmente"
        ]
    },

    # Generic fallback
    Exception: {
        "title": "Error Inesperado",
        "message": "Ocurrió un error inesperado.",
        "suggestions": [
            "Intente la operación nuevamente",
            "Si el problema persiste, consulte los registros de la aplicación"
        ]
    }
}


def get_error_message(exception: Exception) -> dict:
    """
    Get user-friendly error message for an exception.

    Args:
        exception: The exception that occurred

    Returns:
        Dictionary with title, message, and suggestions
    """
    for exc_class in type(exception).__mro__:
        if exc_class in ERROR_MESSAGES:
            error_info = dict(ERROR_MESSAGES[exc_class])
            break
    else:
        error_info = dict(ERROR_MESSAGES[Exception])

    error_info['suggestions'] = list(error_info['suggestions'])

    if getattr(exception, 'details', None):
        error_info['details'] = exception.details
    elif str(exception):
        error_info['details'] = str(exception)

    return error_info


def format_error_message(exception: Exception) -> str:
    """
    Format error message as a string for display.

    Args:
        exception: The exception that occurred

    Returns:
        Formatted error message string
    """
    error_info = get_error_message(exception)

    message = f"{error_info['message']}\n"

    if 'details' in error_info:
        message += f"\nDetalles: {error_info['details']}\n"

    if error_info['suggestions']:
        message += "\nSugerencias:\n"
        for suggestion in error_info['suggestions']:
            message += f"• {suggestion}\n"

    return message.strip()
