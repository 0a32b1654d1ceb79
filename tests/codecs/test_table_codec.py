"""Tests for the CSV table codec."""

import io
import os
import tempfile
import unittest
from unittest.mock import patch

from de430.codecs import TextTableCodec
from de430.codecs.table import COLUMNS
from de430.errors import AllocationError, InvalidConfigError, ParseError
from de430.model import EphemerisCollection, EphemerisPoint, ObjectSeries

HEADER = ",".join(COLUMNS)


def make_row(name, jd, label=""):
    return ",".join([name, str(jd)] + ["0"] * 17 + [label])


class TestTextTableCodec(unittest.TestCase):
    """Test cases for TextTableCodec."""

    def setUp(self):
        self.codec = TextTableCodec()
        self.collection = EphemerisCollection(
            [
                ObjectSeries(
                    "jupiter",
                    [
                        EphemerisPoint(
                            jd=2451544.5,
                            position=[4.0011, 2.9385, 1.1623],
                            ra_dec=[1.5845, 0.1558],
                            magnitude=-2.7,
                            earth_dist=4.6186,
                            constellation="Pisces",
                        )
                    ],
                ),
                ObjectSeries(
                    "mars",
                    [EphemerisPoint(jd=2451544.5), EphemerisPoint(jd=2451545.5)],
                ),
            ]
        )

    def test_header_and_rows(self):
        text = self.codec.encode(self.collection)
        lines = text.splitlines()
        self.assertEqual(lines[0], HEADER)
        self.assertEqual(len(COLUMNS), 20)
        self.assertEqual(len(lines), 4)
        self.assertTrue(lines[1].startswith("jupiter,2451544.5,4.0011,2.9385,1.1623,"))
        self.assertTrue(lines[1].endswith(",Pisces"))
        self.assertEqual(lines[2], make_row("mars", 2451544.5))

    def test_round_trip(self):
        text = self.codec.encode(self.collection)
        decoded = self.codec.decode(text)
        self.assertEqual(decoded, self.collection)
        self.assertEqual(self.codec.encode(decoded), text)

    def test_interleaved_rows(self):
        """Rows are grouped by object in order of first appearance."""
        text = "\n".join(
            [
                HEADER,
                make_row("mars", 2451544.5),
                make_row("jupiter", 2451544.5, "Pisces"),
                make_row("mars", 2451545.5),
            ]
        )
        collection = self.codec.decode(text)
        self.assertEqual(collection.object_names, ["mars", "jupiter"])
        self.assertEqual(collection.get("mars").count, 2)
        self.assertEqual(collection.get("mars").julian_dates, [2451544.5, 2451545.5])
        self.assertEqual(collection.get("jupiter").count, 1)
        self.assertEqual(collection.get("jupiter").points[0].constellation, "Pisces")

    def test_precision(self):
        """Values survive with 15 significant digits."""
        value = 1.0 / 3.0
        collection = EphemerisCollection(
            [ObjectSeries("moon", [EphemerisPoint(jd=2451544.123456789, magnitude=value)])]
        )
        decoded = self.codec.decode(self.codec.encode(collection))
        point = decoded[0].points[0]
        self.assertAlmostEqual(point.jd, 2451544.123456789, places=8)
        self.assertAlmostEqual(point.magnitude, value, places=14)

    def test_delimiter_in_text_replaced(self):
        collection = EphemerisCollection(
            [ObjectSeries("comet,x", [EphemerisPoint(constellation="Ursa,Major")])]
        )
        text = self.codec.encode(collection)
        decoded = self.codec.decode(text)
        self.assertEqual(decoded.object_names, ["comet x"])
        self.assertEqual(decoded[0].points[0].constellation, "Ursa Major")

    def test_short_rows(self):
        """Missing numeric columns are zero; rows with fewer than two fields are skipped."""
        text = "\n".join([HEADER, "mars,2451544.5,1.5", "", "lonely"])
        collection = self.codec.decode(text)
        self.assertEqual(collection.object_names, ["mars"])
        point = collection[0].points[0]
        self.assertEqual(point.jd, 2451544.5)
        self.assertEqual(point.position, [1.5, 0.0, 0.0])
        self.assertEqual(point.constellation, "")

    def test_header_only(self):
        collection = self.codec.decode(HEADER + "\n")
        self.assertEqual(collection.object_count, 0)

    def test_no_header(self):
        with self.assertRaises(ParseError):
            self.codec.decode("")

    def test_long_label_rejected(self):
        with self.assertRaises(ParseError):
            self.codec.decode("\n".join([HEADER, make_row("mars", 1.0, "L" * 32)]))

    def test_non_seekable_stream(self):
        class Pipe(io.StringIO):
            def seekable(self):
                return False

        text = self.codec.encode(self.collection)
        self.assertEqual(self.codec.read(Pipe(text)), self.collection)

    def test_bytes_input(self):
        text = self.codec.encode(self.collection)
        self.assertEqual(self.codec.decode(text.encode("utf-8")), self.collection)
        with self.assertRaises(ParseError):
            self.codec.decode(b"\xff\xfe")

    def test_save_and_load(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            path = os.path.join(temp_dir, "ephemeris.csv")
            self.codec.save(self.collection, path)
            with open(path, encoding="utf-8") as f:
                self.assertEqual(f.readline().rstrip("\n"), HEADER)
            self.assertEqual(self.codec.load(path), self.collection)

    def test_empty_collection_rejected(self):
        with self.assertRaises(InvalidConfigError):
            self.codec.encode(EphemerisCollection())


class TestTextTableCodecFailures(unittest.TestCase):
    def setUp(self):
        self.codec = TextTableCodec()

    def test_oversized_field(self):
        """A field beyond the csv module's limit is a parse error."""
        text = "\n".join([HEADER, make_row("mars", 1.0), make_row("m" * 200000, 2.0)])
        with self.assertRaises(ParseError):
            self.codec.decode(text)

    def test_memory_error_while_decoding(self):
        text = "\n".join([HEADER, make_row("mars", 1.0)])
        with patch.object(EphemerisPoint, "from_values", side_effect=MemoryError()):
            with self.assertRaises(AllocationError):
                self.codec.decode(text)

    def test_reads_from_current_position(self):
        """Both passes start where the caller left the stream."""
        table = "\n".join([HEADER, make_row("mars", 1.0), make_row("mars", 2.0)])
        stream = io.StringIO("object_name,jd\nmars,99\n" + table)
        stream.readline()
        stream.readline()

        collection = self.codec.read(stream)
        self.assertEqual(collection.object_names, ["mars"])
        self.assertEqual(collection[0].julian_dates, [1.0, 2.0])
