# tests/test_point_store.py
"""
Unit tests for point persistence.
"""

import json
import unittest
import sys
import os
import tempfile

# Add root directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core.exceptions import StorageError
from core.models import CapturedPoint, GeographicPosition, PointCategory
from core.projection import project
from storage.point_store import JSONPointStore, InMemoryPointStore


def make_point(point_id="p1", photo=None):
    lat, lon = 20.6597, -103.3496
    return CapturedPoint(
        id=point_id,
        name="Grieta muro norte",
        category=PointCategory.CRACKING,
        characteristics="Grieta diagonal 1.2 m",
        observations="Revisar cimentación",
        captured_at=1760659200000,
        position=GeographicPosition(latitude=lat, longitude=lon, accuracy=3.2),
        projected=project(lat, lon),
        photo=photo,
    )


class TestCapturedPointSerialization(unittest.TestCase):

    def test_persisted_field_names(self):
        data = make_point().to_dict()
        self.assertEqual(data["type"], "Cracking")
        self.assertEqual(data["timestamp"], 1760659200000)
        self.assertEqual(data["coords"]["latitude"], 20.6597)
        self.assertEqual(data["utm"]["zone"], 13)
        self.assertNotIn("photoBase64", data)

    def test_photo_included_when_present(self):
        data = make_point(photo="data:image/jpeg;base64,AAAA").to_dict()
        self.assertEqual(data["photoBase64"], "data:image/jpeg;base64,AAAA")

    def test_from_dict_restores_point(self):
        point = make_point(photo="data:image/png;base64,BBBB")
        self.assertEqual(CapturedPoint.from_dict(point.to_dict()), point)

    def test_unknown_category_rejected(self):
        data = make_point().to_dict()
        data["type"] = "Volcán"
        with self.assertRaises(ValueError):
            CapturedPoint.from_dict(data)


class TestJSONPointStore(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.test_dir = self.tmp.name
        self.store = JSONPointStore(self.test_dir)

    def tearDown(self):
        self.tmp.cleanup()

    def test_path_uses_storage_key(self):
        self.assertEqual(self.store.path.name, "geoSmartPoints.json")

    def test_missing_file_loads_empty(self):
        self.assertEqual(self.store.load(), [])

    def test_save_and_load(self):
        points = [make_point("a"), make_point("b", photo="data:image/jpeg;base64,CCCC")]
        self.store.save(points)
        self.assertEqual(self.store.load(), points)

    def test_file_is_json_array(self):
        self.store.save([make_point("a")])
        with open(self.store.path, encoding="utf-8") as f:
            data = json.load(f)
        self.assertIsInstance(data, list)
        self.assertEqual(data[0]["id"], "a")

    def test_save_replaces_previous_content(self):
        self.store.save([make_point("a"), make_point("b")])
        self.store.save([make_point("b")])
        self.assertEqual([p.id for p in self.store.load()], ["b"])
        leftovers = [name for name in os.listdir(self.test_dir) if name.endswith(".tmp")]
        self.assertEqual(leftovers, [])

    def test_malformed_json(self):
        with open(self.store.path, "w", encoding="utf-8") as f:
            f.write("{no es json")
        with self.assertRaises(StorageError):
            self.store.load()

    def test_not_a_list(self):
        with open(self.store.path, "w", encoding="utf-8") as f:
            json.dump({"points": []}, f)
        with self.assertRaises(StorageError):
            self.store.load()

    def test_invalid_record(self):
        with open(self.store.path, "w", encoding="utf-8") as f:
            json.dump([{"id": "x"}], f)
        with self.assertRaises(StorageError):
            self.store.load()

    def test_custom_key(self):
        store = JSONPointStore(self.test_dir, key="otroLevantamiento")
        store.save([make_point()])
        self.assertTrue(os.path.exists(os.path.join(self.test_dir, "otroLevantamiento.json")))
        self.assertEqual(self.store.load(), [])


class TestInMemoryPointStore(unittest.TestCase):

    def test_empty(self):
        self.assertEqual(InMemoryPointStore().load(), [])

    def test_round_trip(self):
        store = InMemoryPointStore()
        points = [make_point("a")]
        store.save(points)
        self.assertEqual(store.load(), points)


if __name__ == '__main__':
    unittest.main()
