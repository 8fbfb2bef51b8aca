# exporters/kml_exporter.py
"""
KML 2.2 serialization of captured points.

The document is assembled as text rather than through ElementTree:
descriptions go in CDATA sections and names use the full five-entity
escape, neither of which ElementTree can produce.
"""

from datetime import datetime, timezone, tzinfo
from decimal import Decimal
from typing import Iterable, List

from constants import (
    KML_NAMESPACE,
    KML_DOCUMENT_NAME,
    KML_DOCUMENT_DESCRIPTION,
    KML_STYLE_ID,
    KML_ICON_HREF,
    KML_ICON_SCALE,
    KML_LABEL_SCALE,
    KML_DATE_FORMAT,
    MSG_EXPORT_SUCCESS
)
from core.exceptions import FileExportError
from core.models import CapturedPoint
from utils.logger import get_logger

logger = get_logger(__name__)

_XML_ENTITIES = {
    '<': '&lt;',
    '>': '&gt;',
    '&': '&amp;',
    "'": '&apos;',
    '"': '&quot;',
}

CDATA_TERMINATOR = "]]>"


def escape_xml(text: str) -> str:
    """
    Replace the five XML special characters with named entities.

    Single pass over the input, so entities produced here are never
    escaped again.
    """
    return "".join(_XML_ENTITIES.get(ch, ch) for ch in text)


def wrap_cdata(text: str) -> str:
    """
    Wrap text in a CDATA section.

    Every ']]>' inside the text is split across two sections
    (']]]]><![CDATA[>') so it cannot close the block early.
    """
    return "<![CDATA[" + text.replace(CDATA_TERMINATOR, "]]]]><![CDATA[>") + "]]>"


def format_degrees(value: float) -> str:
    """
    Plain decimal text for a coordinate: no exponent and no trailing '.0'
    (-2e-05 -> '-0.00002', -99.0 -> '-99').
    """
    if value == 0:
        return "0"
    return format(Decimal(repr(value)).normalize(), "f")


def format_capture_date(epoch_millis: int, tz: tzinfo = timezone.utc) -> str:
    """Human-readable capture date in the given time zone."""
    return datetime.fromtimestamp(epoch_millis / 1000, tz).strftime(KML_DATE_FORMAT)


class KMLExporter:
    @staticmethod
    def _style() -> str:
        return (
            f'    <Style id="{KML_STYLE_ID}">\n'
            '      <IconStyle>\n'
            f'        <scale>{KML_ICON_SCALE}</scale>\n'
            '        <Icon>\n'
            f'          <href>{KML_ICON_HREF}</href>\n'
            '        </Icon>\n'
            '      </IconStyle>\n'
            '      <LabelStyle>\n'
            f'        <scale>{KML_LABEL_SCALE}</scale>\n'
            '      </LabelStyle>\n'
            '    </Style>\n'
        )

    @staticmethod
    def _description_html(point: CapturedPoint, tz: tzinfo) -> str:
        utm = point.projected
        return (
            f"<b>Tipo:</b> {point.category.value}<br/>"
            f"<b>Características:</b> {point.characteristics}<br/>"
            f"<b>Observaciones:</b> {point.observations}<br/>"
            f"<b>UTM:</b> Zone {utm.zone}{utm.band} E:{utm.easting} N:{utm.northing}<br/>"
            f"<b>Fecha:</b> {format_capture_date(point.captured_at, tz)}"
        )

    @staticmethod
    def _placemark(point: CapturedPoint, tz: tzinfo) -> str:
        # KML coordinate order is lon,lat,alt
        lon = format_degrees(point.position.longitude)
        lat = format_degrees(point.position.latitude)
        coordinates = f"{lon},{lat},0"
        return (
            '    <Placemark>\n'
            f'      <name>{escape_xml(point.name)}</name>\n'
            f'      <description>{wrap_cdata(KMLExporter._description_html(point, tz))}</description>\n'
            f'      <styleUrl>#{KML_STYLE_ID}</styleUrl>\n'
            '      <Point>\n'
            f'        <coordinates>{coordinates}</coordinates>\n'
            '      </Point>\n'
            '    </Placemark>\n'
        )

    @staticmethod
    def export(points: Iterable[CapturedPoint], tz: tzinfo = timezone.utc) -> str:
        """
        Build a KML document with one placemark per point.

        Args:
            points: Captured points; placemarks keep this order
            tz: Time zone used to render capture dates (default: UTC)

        Returns:
            The complete KML document as a string
        """
        placemarks: List[str] = [KMLExporter._placemark(p, tz) for p in points]

        header = (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            f'<kml xmlns="{KML_NAMESPACE}">\n'
            '  <Document>\n'
            f'    <name>{escape_xml(KML_DOCUMENT_NAME)}</name>\n'
            f'    <description>{escape_xml(KML_DOCUMENT_DESCRIPTION)}</description>\n'
        )
        footer = (
            '  </Document>\n'
            '</kml>\n'
        )

        logger.debug(f"KML document built with {len(placemarks)} placemarks")
        return header + KMLExporter._style() + "".join(placemarks) + footer

    @staticmethod
    def export_to_file(
        points: Iterable[CapturedPoint],
        filename: str,
        tz: tzinfo = timezone.utc
    ) -> int:
        """
        Write the KML document for ``points`` to ``filename``.

        Args:
            points: Captured points to export
            filename: Output path, must end in .kml
            tz: Time zone used to render capture dates

        Returns:
            Number of placemarks written

        Raises:
            ValueError: If filename does not end in .kml
            FileExportError: If the file cannot be written
        """
        if not str(filename).lower().endswith(".kml"):
            raise ValueError("El nombre de archivo debe terminar en .kml")

        points = list(points)
        document = KMLExporter.export(points, tz)

        try:
            with open(filename, "w", encoding="utf-8") as f:
                f.write(document)
        except OSError as e:
            logger.error(f"Error writing KML file {filename}: {e}")
            raise FileExportError(
                f"Error durante la escritura del KML: {filename}", details=str(e)
            ) from e

        logger.info(f"{MSG_EXPORT_SUCCESS}: {len(points)} points -> {filename}")
        return len(points)
