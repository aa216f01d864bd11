#!/usr/bin/env python3
"""
Tests for the command-line interface.
"""

import json
import os
import tempfile
import unittest

from click.testing import CliRunner

from quote_fixtures import FIXTURE_CATALOG, SALES_ORDER_TEXT

from schedule_generator.cli import cli


class TestCli(unittest.TestCase):

    def setUp(self):
        self.runner = CliRunner()
        self.temp_dir = tempfile.mkdtemp()

        self.catalog_path = os.path.join(self.temp_dir, "catalog.json")
        with open(self.catalog_path, 'w') as f:
            json.dump(FIXTURE_CATALOG, f)

        self.quote_path = os.path.join(self.temp_dir, "quote.txt")
        with open(self.quote_path, 'w') as f:
            f.write(SALES_ORDER_TEXT)

    def tearDown(self):
        for name in os.listdir(self.temp_dir):
            os.unlink(os.path.join(self.temp_dir, name))
        os.rmdir(self.temp_dir)

    def test_generate_writes_json(self):
        output_path = os.path.join(self.temp_dir, "schedule.json")
        result = self.runner.invoke(cli, [
            'generate', self.quote_path,
            '--catalog', self.catalog_path,
            '--country', 'USA',
            '--no-preview',
            '-o', output_path,
        ])

        self.assertEqual(result.exit_code, 0, result.output)
        with open(output_path) as f:
            data = json.load(f)

        self.assertEqual(data["projectName"], "SUDZ EXPRESS CAR WASH")
        self.assertEqual(data["totalMotors"], 4)
        self.assertAlmostEqual(data["totalAmps"], 59.1, places=2)
        self.assertEqual(data["items"][0]["itemNumber"], "1")
        self.assertEqual(data["notFoundItems"], ["ZZ-UNKNOWN-9 - Mystery Widget"])

    def test_generate_preview(self):
        result = self.runner.invoke(cli, [
            'generate', self.quote_path,
            '--catalog', self.catalog_path,
            '--country', 'Canada',
        ])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Total Motors", result.output)
        self.assertIn("47.38", result.output)

    def test_generate_empty_file_fails(self):
        empty_path = os.path.join(self.temp_dir, "empty.txt")
        with open(empty_path, 'w') as f:
            f.write("   \n")

        result = self.runner.invoke(cli, ['generate', empty_path, '--catalog', self.catalog_path])

        self.assertNotEqual(result.exit_code, 0)
        self.assertIn("Error generating schedule", result.output)

    def test_lookup_prefix_match(self):
        result = self.runner.invoke(cli, ['lookup', 'RC4-SS-OPT', '--catalog', self.catalog_path])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("RC4", result.output)
        self.assertIn("prefix", result.output)

    def test_lookup_unknown_part(self):
        result = self.runner.invoke(cli, ['lookup', 'ZZ-UNKNOWN-9', '--catalog', self.catalog_path])

        self.assertEqual(result.exit_code, 1)
        self.assertIn("not in the catalog", result.output)

    def test_countries(self):
        result = self.runner.invoke(cli, ['countries'])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Canada", result.output)
        self.assertIn("575V", result.output)


if __name__ == '__main__':
    unittest.main()
