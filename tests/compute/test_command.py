"""Tests for building the ephemeris tool command line."""

import os
import unittest
from unittest.mock import patch

from de430.compute import (
    DEFAULT_DOCKER_IMAGE,
    De430Config,
    build_docker_command,
    build_ephemeris_args,
    format_command,
    get_docker_image,
)


class TestBuildEphemerisArgs(unittest.TestCase):
    def test_range_request(self):
        args = build_ephemeris_args(De430Config(objects="jupiter,mars"))
        self.assertEqual(
            args,
            [
                "--jd_min",
                "2451544.500000000000000",
                "--jd_max",
                "2451574.500000000000000",
                "--jd_step",
                "1.000000000000000",
                "--epoch",
                "2451545.000000000000000",
                "--objects",
                "jupiter,mars",
                "--output_format",
                "0",
                "--use_orbital_elements",
                "0",
                "--output_constellations",
                "0",
            ],
        )

    def test_jd_list_replaces_range(self):
        args = build_ephemeris_args(De430Config(jd_list=[2451545.0, 2451546.25]))
        self.assertNotIn("--jd_min", args)
        index = args.index("--jd_list")
        self.assertEqual(
            args[index + 1], "2451545.000000000000000,2451546.250000000000000"
        )

    def test_topocentric(self):
        config = De430Config(
            latitude=51.4778, longitude=-0.0014, enable_topocentric=True
        )
        args = build_ephemeris_args(config)
        index = args.index("--latitude")
        self.assertEqual(
            args[index : index + 6],
            [
                "--latitude",
                "51.477800",
                "--longitude",
                "-0.001400",
                "--enable_topocentric_correction",
                "1",
            ],
        )

    def test_location_ignored_without_topocentric(self):
        args = build_ephemeris_args(De430Config(latitude=10.0))
        self.assertNotIn("--latitude", args)

    def test_flags(self):
        config = De430Config(
            output_format=3, use_orbital_elements=True, output_constellations=True
        )
        args = build_ephemeris_args(config)
        self.assertEqual(args[args.index("--output_format") + 1], "3")
        self.assertEqual(args[args.index("--use_orbital_elements") + 1], "1")
        self.assertEqual(args[args.index("--output_constellations") + 1], "1")


class TestDockerCommand(unittest.TestCase):
    def test_default_image(self):
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(get_docker_image(), DEFAULT_DOCKER_IMAGE)
            argv = build_docker_command(De430Config())
        self.assertEqual(
            argv[:5],
            ["docker", "run", "--rm", "ephemeris-compute-de430:v6", "./bin/ephem.bin"],
        )
        self.assertEqual(argv[5], "--jd_min")

    def test_image_from_environment(self):
        with patch.dict(os.environ, {"DE430_DOCKER_IMAGE": "ephem:test"}):
            self.assertEqual(build_docker_command(De430Config())[3], "ephem:test")

    def test_explicit_image(self):
        argv = build_docker_command(De430Config(), image="custom:1")
        self.assertEqual(argv[3], "custom:1")

    def test_format_command(self):
        self.assertEqual(
            format_command(["docker", "run", "--objects", "a b"]),
            "docker run --objects 'a b'",
        )
