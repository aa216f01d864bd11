#!/usr/bin/env python3
"""
Tests for catalog loading and part number resolution.
"""

import json
import os
import tempfile
import unittest

from quote_fixtures import FIXTURE_CATALOG, make_catalog

from schedule_generator.catalog import CatalogIndex, base_segment, parse_phase
from schedule_generator.config import DEFAULT_CATALOG_PATH
from schedule_generator.exceptions import CatalogLoadError


class TestCatalogResolution(unittest.TestCase):
    """Ranked matching: exact, then prefix, then base segment."""

    def setUp(self):
        self.catalog = make_catalog()

    def test_exact_match(self):
        match = self.catalog.resolve("RC4")

        self.assertEqual(match.strategy, "exact")
        self.assertEqual(match.entry.key, "RC4")
        self.assertEqual(len(match.entry.sub_components), 2)

    def test_exact_match_is_deterministic(self):
        for key in FIXTURE_CATALOG:
            with self.subTest(key=key):
                first = self.catalog.resolve(key)
                second = self.catalog.resolve(key)
                self.assertEqual(first.strategy, "exact")
                self.assertEqual(first, second)

    def test_ordered_part_with_option_suffix(self):
        match = self.catalog.resolve("RC4-SS-OPT")

        self.assertEqual(match.strategy, "prefix")
        self.assertEqual(match.entry.key, "RC4")

    def test_quoted_part_shorter_than_catalog_key(self):
        match = self.catalog.resolve("CONV")

        self.assertEqual(match.strategy, "prefix")
        self.assertEqual(match.entry.key, "CONV-120")

    def test_prefix_prefers_longest_key(self):
        catalog = CatalogIndex.from_dict({
            "HP-PUMP": {"main": {"description": "PUMP BASE"}},
            "HP-PUMP-5": {"main": {"description": "PUMP 5HP"}},
        })
        self.assertEqual(catalog.resolve("HP-PUMP-5X").entry.key, "HP-PUMP-5")

    def test_base_segment_match(self):
        match = self.catalog.resolve("TIRE-GLOSS")

        self.assertEqual(match.strategy, "base_segment")
        self.assertEqual(match.entry.key, "TIRE-SHINE")

    def test_short_base_segment_is_not_matched(self):
        self.assertIsNone(self.catalog.match_base_segment("RC-9"))
        self.assertIsNone(self.catalog.resolve("RC-9"))

    def test_tiers_in_isolation(self):
        self.assertIsNone(self.catalog.match_exact("RC4-SS-OPT"))
        self.assertIsNone(self.catalog.match_prefix("TIRE-GLOSS"))
        self.assertEqual(self.catalog.match_base_segment("RCL-99").key, "RCL-20")

    def test_not_found(self):
        self.assertIsNone(self.catalog.resolve("ZZ-UNKNOWN-9"))
        self.assertIsNone(self.catalog.resolve(""))
        self.assertIsNone(self.catalog.resolve("   "))


class TestCatalogLoading(unittest.TestCase):

    def test_records_are_parsed(self):
        entry = make_catalog().get("HP-PUMP-5")

        self.assertEqual(entry.main.part_number, "HP-PUMP-5")
        self.assertEqual(entry.main.phase, 3)
        self.assertEqual(entry.main.breaker_rating, 30)
        self.assertEqual(entry.main.cold_water, "1\"")
        self.assertEqual(entry.main.flow_rate_gpm, 8)
        self.assertEqual(entry.sub_components, ())

    def test_sub_component_order_is_kept(self):
        entry = make_catalog().get("CP-WASH")
        self.assertEqual(
            [record.description for record in entry.sub_components],
            ["CONTROL PANEL ENCLOSURE", "SOLENOID VALVE, PRESOAK", "SOLENOID VALVE, RINSE", "PLC EXPANSION RACK"],
        )

    def test_main_part_number_defaults_to_key(self):
        catalog = CatalogIndex.from_dict({"XYZ-1": {"main": {"description": "THING"}}})
        self.assertEqual(catalog.get("XYZ-1").main.part_number, "XYZ-1")

    def test_malformed_entry_is_skipped(self):
        catalog = CatalogIndex.from_dict({
            "GOOD": {"main": {"description": "OK"}},
            "BAD": {"sub_components": []},
            "WORSE": "not an entry",
        })
        self.assertEqual(catalog.keys, ("GOOD",))

    def test_from_json(self):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as f:
            json.dump(FIXTURE_CATALOG, f)
            temp_file = f.name

        try:
            catalog = CatalogIndex.from_json(temp_file)
            self.assertEqual(len(catalog), len(FIXTURE_CATALOG))
            self.assertIn("RC4", catalog)
        finally:
            os.unlink(temp_file)

    def test_missing_file(self):
        with self.assertRaises(CatalogLoadError):
            CatalogIndex.from_json("/nonexistent/catalog.json")

    def test_invalid_json(self):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as f:
            f.write("{not json")
            temp_file = f.name

        try:
            with self.assertRaises(CatalogLoadError):
                CatalogIndex.from_json(temp_file)
        finally:
            os.unlink(temp_file)

    def test_bundled_catalog_loads(self):
        catalog = CatalogIndex.from_json(DEFAULT_CATALOG_PATH)
        self.assertGreater(len(catalog), 0)
        self.assertEqual(catalog.resolve("RC4").strategy, "exact")


class TestHelpers(unittest.TestCase):

    def test_parse_phase(self):
        test_cases = [
            (3, 3),
            ("3", 3),
            (3.0, 3),
            ("1", 1),
            (2, None),
            ("-", None),
            (None, None),
            (True, None),
        ]
        for value, expected in test_cases:
            with self.subTest(value=value):
                self.assertEqual(parse_phase(value), expected)

    def test_base_segment(self):
        self.assertEqual(base_segment("WA1M-72-510"), "WA1M")
        self.assertEqual(base_segment("RC4"), "RC4")


if __name__ == '__main__':
    unittest.main()
