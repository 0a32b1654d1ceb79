"""Tests for the ephemeris request configuration."""

import unittest

from de430.compute import J2000, De430Config
from de430.errors import InvalidConfigError


class TestDe430Config(unittest.TestCase):
    def test_defaults(self):
        config = De430Config()
        self.assertEqual(config.jd_min, 2451544.5)
        self.assertEqual(config.jd_max, 2451574.5)
        self.assertEqual(config.jd_step, 1.0)
        self.assertIsNone(config.jd_list)
        self.assertEqual(config.epoch, J2000)
        self.assertEqual(config.objects, "jupiter")
        self.assertEqual(config.output_format, 0)
        self.assertFalse(config.enable_topocentric)
        self.assertFalse(config.use_orbital_elements)
        self.assertFalse(config.output_constellations)
        self.assertFalse(config.uses_jd_list)

    def test_invalid_values(self):
        for kwargs in (
            {"latitude": 90.5},
            {"longitude": -181.0},
            {"output_format": 4},
            {"output_format": -2},
            {"jd_step": 0.0},
            {"jd_min": 2451600.0, "jd_max": 2451500.0},
        ):
            with self.subTest(**kwargs):
                with self.assertRaises(InvalidConfigError):
                    De430Config(**kwargs)

    def test_jd_list_skips_range_checks(self):
        config = De430Config(jd_list=[2451545.0], jd_step=0.0)
        self.assertTrue(config.uses_jd_list)
