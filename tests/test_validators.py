# tests/test_validators.py
"""
Unit tests for boundary validation.
"""

import unittest
import sys
import os

# Add root directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core.exceptions import InvalidCoordinateError
from core.models import GeographicPosition, PointCategory
from utils.validators import (
    validate_position,
    validate_decimal_degrees,
    validate_category,
    normalize_category,
    is_utm_latitude
)


class TestValidatePosition(unittest.TestCase):

    def test_valid_sample(self):
        position = validate_position(19.4326, -99.1332, 5)
        self.assertEqual(position, GeographicPosition(19.4326, -99.1332, 5.0))

    def test_numeric_strings_accepted(self):
        position = validate_position("19.5", "-99.25", "0")
        self.assertEqual(position.latitude, 19.5)
        self.assertEqual(position.longitude, -99.25)

    def test_limits_inclusive(self):
        validate_position(90, 180)
        validate_position(-90, -180)

    def test_latitude_out_of_range(self):
        with self.assertRaises(InvalidCoordinateError) as ctx:
            validate_position(90.0001, 0)
        self.assertEqual(ctx.exception.field_name, "latitude")

    def test_longitude_out_of_range(self):
        with self.assertRaises(InvalidCoordinateError) as ctx:
            validate_position(0, -180.5)
        self.assertEqual(ctx.exception.field_name, "longitude")

    def test_non_finite(self):
        for bad in (float("nan"), float("inf"), float("-inf")):
            with self.subTest(value=bad):
                with self.assertRaises(InvalidCoordinateError):
                    validate_position(bad, 0)
                with self.assertRaises(InvalidCoordinateError):
                    validate_position(0, bad)

    def test_non_numeric(self):
        for bad in (None, "norte", True, [1]):
            with self.subTest(value=bad):
                with self.assertRaises(InvalidCoordinateError):
                    validate_position(bad, 0)

    def test_negative_accuracy(self):
        with self.assertRaises(InvalidCoordinateError) as ctx:
            validate_position(0, 0, -1)
        self.assertEqual(ctx.exception.field_name, "accuracy")


class TestValidateDecimalDegrees(unittest.TestCase):

    def test_latitude(self):
        self.assertEqual(validate_decimal_degrees("19.4326"), (True, 19.4326))
        self.assertEqual(validate_decimal_degrees("91"), (False, None))

    def test_longitude(self):
        self.assertEqual(validate_decimal_degrees(-99.1332, is_longitude=True), (True, -99.1332))
        self.assertEqual(validate_decimal_degrees("181", is_longitude=True), (False, None))

    def test_invalid(self):
        self.assertEqual(validate_decimal_degrees("abc"), (False, None))
        self.assertEqual(validate_decimal_degrees(""), (False, None))


class TestUTMLatitude(unittest.TestCase):

    def test_range(self):
        self.assertTrue(is_utm_latitude(84.0))
        self.assertTrue(is_utm_latitude(-80.0))
        self.assertFalse(is_utm_latitude(84.01))
        self.assertFalse(is_utm_latitude(-80.01))


class TestCategories(unittest.TestCase):

    def test_all_labels_recognized(self):
        for label in PointCategory.labels():
            with self.subTest(label=label):
                self.assertEqual(normalize_category(label).value, label)

    def test_fixed_set(self):
        self.assertEqual(
            sorted(PointCategory.labels()),
            sorted([
                "Infrastructure", "Vegetation", "Hydrography", "Control-Point",
                "Flooding", "Sinkhole", "Subsidence", "Cracking", "Overflow",
                "Landslide", "Other"
            ])
        )

    def test_whitespace_stripped(self):
        self.assertEqual(normalize_category("  Sinkhole "), PointCategory.SINKHOLE)

    def test_unknown_falls_back(self):
        self.assertEqual(normalize_category("Deslave"), PointCategory.OTHER)
        self.assertEqual(normalize_category(""), PointCategory.OTHER)
        self.assertEqual(normalize_category(None), PointCategory.OTHER)

    def test_enum_passthrough(self):
        self.assertEqual(normalize_category(PointCategory.OVERFLOW), PointCategory.OVERFLOW)

    def test_strict_validation(self):
        self.assertEqual(validate_category("Flooding"), (True, PointCategory.FLOODING))
        self.assertEqual(validate_category("flooding"), (False, None))


if __name__ == '__main__':
    unittest.main()
