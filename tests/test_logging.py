"""Tests for de430 logging configuration."""

import logging
import os
import unittest
from unittest.mock import patch

from de430.logging import DEFAULT_LOG_LEVEL, _get_log_level, get_logger, set_log_level


class TestLogging(unittest.TestCase):
    def tearDown(self):
        set_log_level(DEFAULT_LOG_LEVEL)

    def test_level_from_environment(self):
        with patch.dict(os.environ, {"DE430_LOG_LEVEL": "debug"}):
            self.assertEqual(_get_log_level(), logging.DEBUG)
        with patch.dict(os.environ, {"DE430_LOG_LEVEL": "nonsense"}):
            self.assertEqual(_get_log_level(), DEFAULT_LOG_LEVEL)

    def test_get_logger_attaches_one_handler(self):
        logger = get_logger("de430.tests.handler")
        self.assertEqual(len(get_logger("de430.tests.handler").handlers), 1)
        self.assertFalse(logger.propagate)

    def test_set_log_level_updates_existing_loggers(self):
        logger = get_logger("de430.tests.level")
        set_log_level(logging.INFO)
        self.assertEqual(logger.level, logging.INFO)
        self.assertEqual(logger.handlers[0].level, logging.INFO)
        self.assertEqual(logging.getLogger("de430").level, logging.INFO)
