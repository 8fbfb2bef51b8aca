# exporters/kmz_exporter.py
import zipfile
from datetime import timezone, tzinfo
from typing import Iterable

from constants import KMZ_INNER_DOCUMENT, MSG_EXPORT_SUCCESS
from core.exceptions import FileExportError
from core.models import CapturedPoint
from exporters.kml_exporter import KMLExporter
from utils.logger import get_logger

logger = get_logger(__name__)


class KMZExporter:
    @staticmethod
    def export(
        points: Iterable[CapturedPoint],
        filename: str,
        tz: tzinfo = timezone.utc
    ) -> int:
        """
        Write the KML document for ``points`` zipped as a .kmz archive.

        Returns:
            Number of placemarks written

        Raises:
            ValueError: If filename does not end in .kmz
            FileExportError: If the archive cannot be written
        """
        if not str(filename).lower().endswith(".kmz"):
            raise ValueError("El nombre de archivo debe terminar en .kmz")

        points = list(points)
        kml_content_bytes = KMLExporter.export(points, tz).encode('utf-8')

        try:
            with zipfile.ZipFile(filename, 'w', zipfile.ZIP_DEFLATED) as kmz_file:
                kmz_file.writestr(KMZ_INNER_DOCUMENT, kml_content_bytes)
        except OSError as e:
            logger.error(f"Error writing KMZ file {filename}: {e}")
            raise FileExportError(
                f"Error al crear el archivo KMZ '{filename}'", details=str(e)
            ) from e

        logger.info(f"{MSG_EXPORT_SUCCESS}: {len(points)} points -> {filename}")
        return len(points)
