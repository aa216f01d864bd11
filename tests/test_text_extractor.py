#!/usr/bin/env python3
"""
Tests for quote text extraction and configuration loading.
"""

import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import quote_fixtures  # noqa: F401  (puts src on the path)

from schedule_generator.config import (
    DEFAULT_CATALOG_PATH,
    DEFAULT_COUNTRY,
    EXCLUDED_PART_NUMBERS,
    ScheduleConfig,
)
from schedule_generator.exceptions import ScheduleError, TextExtractionError
from schedule_generator.text_extractor import QuoteTextExtractor, extract_quote_text


class TestQuoteTextExtractor(unittest.TestCase):

    def setUp(self):
        self.extractor = QuoteTextExtractor()

    def _write(self, content, suffix='.txt'):
        with tempfile.NamedTemporaryFile(mode='w', suffix=suffix, delete=False) as f:
            f.write(content)
            temp_file = f.name
        self.addCleanup(os.unlink, temp_file)
        return temp_file

    def test_text_file_is_read(self):
        path = self._write("Item Description Qty Unit Price Total\r\nRC4 Roller 1 1.00 1.00T\r\n")
        text = extract_quote_text(path)

        self.assertEqual(text, "Item Description Qty Unit Price Total\nRC4 Roller 1 1.00 1.00T")

    def test_missing_file(self):
        with self.assertRaises(TextExtractionError):
            self.extractor.extract_text("/nonexistent/quote.pdf")

    def test_empty_file(self):
        path = self._write("  \n\n")
        with self.assertRaises(TextExtractionError):
            self.extractor.extract_text(path)

    def test_extraction_errors_are_schedule_errors(self):
        self.assertTrue(issubclass(TextExtractionError, ScheduleError))

    def test_clean_text(self):
        test_cases = [
            ("RC4(cid:3) Roller", "RC4 Roller"),
            ("page one\fpage two", "page one\npage two"),
            ("SHIP TO   \nSUDZ  WASH   ", "SHIP TO\nSUDZ  WASH"),
            ("", ""),
        ]
        for raw, expected in test_cases:
            with self.subTest(raw=raw):
                self.assertEqual(self.extractor.clean_text(raw), expected)


class TestScheduleConfig(unittest.TestCase):

    def test_defaults(self):
        config = ScheduleConfig()

        self.assertEqual(config.catalog_path, DEFAULT_CATALOG_PATH)
        self.assertEqual(config.default_country, DEFAULT_COUNTRY)
        self.assertEqual(config.excluded_part_numbers, EXCLUDED_PART_NUMBERS)
        self.assertIn("GEARMOTOR", config.motor_keywords)

    def test_environment_overrides(self):
        env = {
            "SCHEDULE_CATALOG_PATH": "/srv/catalog.json",
            "SCHEDULE_DEFAULT_COUNTRY": "Canada",
        }
        with patch.dict(os.environ, env):
            config = ScheduleConfig.from_env()

        self.assertEqual(config.catalog_path, Path("/srv/catalog.json"))
        self.assertEqual(config.default_country, "Canada")

    def test_explicit_overrides_win(self):
        with patch.dict(os.environ, {"SCHEDULE_CATALOG_PATH": "/srv/catalog.json"}):
            config = ScheduleConfig.from_env(catalog_path="/tmp/other.json", default_country=None)

        self.assertEqual(config.catalog_path, Path("/tmp/other.json"))
        self.assertEqual(config.default_country, DEFAULT_COUNTRY)


if __name__ == '__main__':
    unittest.main()
