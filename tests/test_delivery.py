# tests/test_delivery.py
"""
Unit tests for KMZ export and dated export delivery.
"""

import unittest
import sys
import os
import tempfile
import zipfile
from datetime import date

# Add root directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core.exceptions import InsufficientDataError
from core.models import CapturedPoint, GeographicPosition, PointCategory
from core.projection import project
from exporters.delivery import deliver_export, export_filename, ExportResult
from exporters.kml_exporter import KMLExporter
from exporters.kmz_exporter import KMZExporter


def make_point(point_id="p1", name="Hundimiento calle 5", lat=-12.0464, lon=-77.0428):
    return CapturedPoint(
        id=point_id,
        name=name,
        category=PointCategory.SINKHOLE,
        characteristics="Diámetro 2 m",
        observations="Acordonado",
        captured_at=1760659200000,
        position=GeographicPosition(latitude=lat, longitude=lon, accuracy=6.5),
        projected=project(lat, lon),
    )


class TestKMZExporter(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.test_dir = self.tmp.name

    def tearDown(self):
        self.tmp.cleanup()

    def test_archive_holds_doc_kml(self):
        points = [make_point("a"), make_point("b", lat=-12.05, lon=-77.04)]
        filename = os.path.join(self.test_dir, "puntos.kmz")
        self.assertEqual(KMZExporter.export(points, filename), 2)

        with zipfile.ZipFile(filename) as kmz:
            self.assertEqual(kmz.namelist(), ["doc.kml"])
            content = kmz.read("doc.kml").decode("utf-8")

        self.assertEqual(content, KMLExporter.export(points))

    def test_bad_extension(self):
        with self.assertRaises(ValueError):
            KMZExporter.export([make_point()], os.path.join(self.test_dir, "puntos.kml"))


class TestExportFilename(unittest.TestCase):

    def test_kml(self):
        self.assertEqual(export_filename(date(2026, 10, 17)), "levantamiento_2026-10-17.kml")

    def test_kmz(self):
        self.assertEqual(export_filename(date(2026, 1, 5), "kmz"), "levantamiento_2026-01-05.kmz")


class TestDeliverExport(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.test_dir = self.tmp.name

    def tearDown(self):
        self.tmp.cleanup()

    def test_kml_delivery(self):
        result = deliver_export([make_point()], self.test_dir, today=date(2026, 10, 17))
        self.assertIsInstance(result, ExportResult)
        self.assertEqual(result.path.name, "levantamiento_2026-10-17.kml")
        self.assertEqual(result.mime_type, "application/vnd.google-earth.kml+xml")
        self.assertEqual(result.point_count, 1)
        self.assertTrue(result.path.exists())

    def test_kmz_delivery(self):
        result = deliver_export([make_point()], self.test_dir, fmt="KMZ", today=date(2026, 10, 17))
        self.assertEqual(result.path.suffix, ".kmz")
        self.assertEqual(result.mime_type, "application/vnd.google-earth.kmz")
        self.assertTrue(zipfile.is_zipfile(result.path))

    def test_creates_directory(self):
        target = os.path.join(self.test_dir, "exports", "hoy")
        result = deliver_export([make_point()], target, today=date(2026, 10, 17))
        self.assertTrue(result.path.exists())

    def test_default_date_is_today(self):
        result = deliver_export([make_point()], self.test_dir)
        self.assertTrue(result.path.name.startswith("levantamiento_"))
        self.assertTrue(result.path.name.endswith(".kml"))

    def test_empty_collection(self):
        with self.assertRaises(InsufficientDataError):
            deliver_export([], self.test_dir)

    def test_unsupported_format(self):
        with self.assertRaises(ValueError):
            deliver_export([make_point()], self.test_dir, fmt="shp")


if __name__ == '__main__':
    unittest.main()
