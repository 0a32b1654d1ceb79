"""Tests for ObjectSeries and EphemerisCollection."""

import unittest

from de430.errors import InvalidConfigError
from de430.model import EphemerisCollection, EphemerisPoint, ObjectSeries


def make_series(name, dates):
    return ObjectSeries(name, [EphemerisPoint(jd=jd) for jd in dates])


class TestObjectSeries(unittest.TestCase):
    """Test cases for ObjectSeries."""

    def test_count_tracks_points(self):
        series = make_series("mars", [1.0, 2.0])
        self.assertEqual(series.count, 2)
        self.assertEqual(len(series), 2)
        series.points.append(EphemerisPoint(jd=3.0))
        self.assertEqual(series.count, 3)
        self.assertEqual(series.julian_dates, [1.0, 2.0, 3.0])

    def test_empty_series(self):
        series = ObjectSeries("mars")
        self.assertEqual(series.count, 0)
        self.assertEqual(list(series), [])

    def test_name_validation(self):
        with self.assertRaises(ValueError):
            ObjectSeries("")
        with self.assertRaises(ValueError):
            ObjectSeries("x" * 64)
        self.assertEqual(ObjectSeries("x" * 63).object_name, "x" * 63)

    def test_equality(self):
        self.assertEqual(make_series("mars", [1.0]), make_series("mars", [1.0]))
        self.assertNotEqual(make_series("mars", [1.0]), make_series("venus", [1.0]))
        self.assertNotEqual(make_series("mars", [1.0]), make_series("mars", [2.0]))


class TestEphemerisCollection(unittest.TestCase):
    """Test cases for EphemerisCollection."""

    def setUp(self):
        self.collection = EphemerisCollection(
            [make_series("jupiter", [1.0, 2.0]), make_series("mars", [1.0, 2.0])]
        )

    def test_accessors(self):
        self.assertEqual(self.collection.object_count, 2)
        self.assertEqual(len(self.collection), 2)
        self.assertEqual(self.collection.object_names, ["jupiter", "mars"])
        self.assertEqual(self.collection[1].object_name, "mars")
        self.assertEqual(self.collection.get("mars").count, 2)
        self.assertIsNone(self.collection.get("saturn"))

    def test_duplicate_names_rejected(self):
        with self.assertRaises(ValueError):
            EphemerisCollection([make_series("mars", []), make_series("mars", [])])

    def test_is_cotemporal(self):
        self.assertTrue(self.collection.is_cotemporal())
        self.assertTrue(EphemerisCollection().is_cotemporal())
        skewed = EphemerisCollection(
            [make_series("jupiter", [1.0, 2.0]), make_series("mars", [1.0])]
        )
        self.assertFalse(skewed.is_cotemporal())

    def test_release_once(self):
        """A collection can be released exactly once."""
        series = self.collection[0]
        self.collection.release()
        self.assertTrue(self.collection.released)
        self.assertEqual(self.collection.object_count, 0)
        self.assertEqual(series.points, [])

        with self.assertRaises(InvalidConfigError):
            self.collection.release()

    def test_context_manager_releases(self):
        with self.collection as collection:
            self.assertIs(collection, self.collection)
            self.assertFalse(collection.released)
        self.assertTrue(self.collection.released)

    def test_context_manager_after_explicit_release(self):
        with self.collection as collection:
            collection.release()
        self.assertTrue(self.collection.released)
