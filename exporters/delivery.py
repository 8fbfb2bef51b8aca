# exporters/delivery.py
"""
Export delivery: turns the point collection into a dated KML/KMZ file.
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone, tzinfo
from pathlib import Path
from typing import Iterable, Optional

from constants import (
    EXPORT_FILE_PREFIX,
    EXPORT_FORMATS,
    KML_MIME_TYPE,
    KMZ_MIME_TYPE,
    MSG_NO_DATA
)
from core.exceptions import FileExportError, InsufficientDataError
from core.models import CapturedPoint
from exporters.kml_exporter import KMLExporter
from exporters.kmz_exporter import KMZExporter

MIME_TYPES = {
    "kml": KML_MIME_TYPE,
    "kmz": KMZ_MIME_TYPE,
}


@dataclass(frozen=True)
class ExportResult:
    path: Path
    mime_type: str
    point_count: int


def export_filename(day: date, extension: str = "kml") -> str:
    """Dated file name, e.g. levantamiento_2026-10-17.kml."""
    return f"{EXPORT_FILE_PREFIX}_{day.isoformat()}.{extension}"


def deliver_export(
    points: Iterable[CapturedPoint],
    directory,
    fmt: str = "kml",
    today: Optional[date] = None,
    tz: tzinfo = timezone.utc
) -> ExportResult:
    """
    Write the export file for ``points`` into ``directory``.

    Args:
        points: Captured points in display order
        directory: Destination folder (created if missing)
        fmt: "kml" or "kmz"
        today: Date used in the file name (default: today in ``tz``)
        tz: Time zone for capture dates and the default file date

    Returns:
        ExportResult with the written path and its MIME type

    Raises:
        ValueError: If fmt is not supported
        InsufficientDataError: If there are no points to export
        FileExportError: If the file cannot be written
    """
    fmt = fmt.lower()
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Formato de exportación no soportado: {fmt}")

    points = list(points)
    if not points:
        raise InsufficientDataError(MSG_NO_DATA)

    if today is None:
        today = datetime.now(tz).date()

    directory = Path(directory)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileExportError(f"No se pudo crear la carpeta: {directory}", details=str(e)) from e
    path = directory / export_filename(today, fmt)

    if fmt == "kmz":
        count = KMZExporter.export(points, str(path), tz)
    else:
        count = KMLExporter.export_to_file(points, str(path), tz)

    return ExportResult(path=path, mime_type=MIME_TYPES[fmt], point_count=count)
