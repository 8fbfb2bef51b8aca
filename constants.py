# constants.py
"""
Application-wide constants for GeoSmart Mapper.
Centralizes configuration values, export settings, and geodetic parameters.
"""

# Application Information
APP_NAME = "GeoSmart Mapper"
APP_VERSION = "1.0.0"
APP_DATA_DIR_NAME = ".geosmart"

# Persistence
STORAGE_KEY = "geoSmartPoints"
STORAGE_FILE_EXTENSION = ".json"

# Export Configuration
KML_NAMESPACE = "http://www.opengis.net/kml/2.2"
KML_DOCUMENT_NAME = "Levantamiento GeoSmart"
KML_DOCUMENT_DESCRIPTION = "Puntos capturados con GeoSmart Mapper"
KML_STYLE_ID = "pointStyle"
KML_ICON_HREF = "http://maps.google.com/mapfiles/kml/paddle/red-circle.png"
KML_ICON_SCALE = "1.1"
KML_LABEL_SCALE = "1.0"
KML_DATE_FORMAT = "%d/%m/%Y %H:%M:%S %Z"
KML_MIME_TYPE = "application/vnd.google-earth.kml+xml"
KMZ_MIME_TYPE = "application/vnd.google-earth.kmz"
KMZ_INNER_DOCUMENT = "doc.kml"
EXPORT_FILE_PREFIX = "levantamiento"
EXPORT_FORMATS = ["kml", "kmz"]

# WGS84 / UTM Parameters
WGS84_SEMI_MAJOR_AXIS = 6378137.0
WGS84_ECCENTRICITY_SQ = 0.00669438
UTM_SCALE_FACTOR = 0.9996
UTM_FALSE_EASTING = 500000.0
UTM_FALSE_NORTHING_SOUTH = 10000000.0
UTM_BAND_LETTERS = "CDEFGHJKLMNPQRSTUVWXX"
UTM_DEFAULT_BAND = "X"
UTM_MIN_LATITUDE = -80.0
UTM_MAX_LATITUDE = 84.0
DEFAULT_EPSG_NORTH_BASE = 32600
DEFAULT_EPSG_SOUTH_BASE = 32700
WGS84_EPSG = 4326

# Image Analysis
OPENAI_API_KEY_ENV = "OPENAI_API_KEY"
DEFAULT_ANALYSIS_MODEL = "gpt-4o-mini"
DEFAULT_IMAGE_MIME_TYPE = "image/jpeg"

# UI Messages
MSG_NO_DATA = "No hay puntos para exportar"
MSG_WAITING_GPS = "Esperando señal GPS..."
MSG_GPS_UNKNOWN_ERROR = "Error desconocido de GPS"
MSG_ANALYSIS_FAILED = "Error analizando imagen. Intenta nuevamente."
MSG_EXPORT_SUCCESS = "Exportación exitosa"

# Logging Configuration
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "geosmart.log"
LOG_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
LOG_BACKUP_COUNT = 3
