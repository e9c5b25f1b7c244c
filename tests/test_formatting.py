#!/usr/bin/env python3
"""
Test display formatters for fairmint

Tests the formatters used next to the launch form:
1. Base units -> display units, exactly
2. Durations in h/m/s and d/h
"""

import unittest

from fairmint.core.economics import format_base_units, format_days, format_seconds


class TestFormatBaseUnits(unittest.TestCase):
    """Base-unit integers rendered as display units."""

    def test_whole_tokens(self):
        self.assertEqual(format_base_units(10_000_000_000), "10")
        self.assertEqual(format_base_units(0), "0")

    def test_fractional_tokens(self):
        self.assertEqual(format_base_units(1_500_000_000), "1.5")
        self.assertEqual(format_base_units(1), "0.000000001")
        self.assertEqual(format_base_units(10_000_000), "0.01")

    def test_large_values(self):
        self.assertEqual(format_base_units(250_000_000_000_000_000_000), "250000000000")
        self.assertEqual(format_base_units(2 ** 64 - 1), "18446744073.709551615")

    def test_negative(self):
        self.assertEqual(format_base_units(-1_500_000_000), "-1.5")

    def test_custom_decimals(self):
        self.assertEqual(format_base_units(12345, decimals=2), "123.45")
        self.assertEqual(format_base_units(7, decimals=0), "7")


class TestDurations(unittest.TestCase):
    """Duration formatters."""

    def test_format_seconds(self):
        self.assertEqual(format_seconds(3725), "1h 2m 5s")
        self.assertEqual(format_seconds(3600), "1h")
        self.assertEqual(format_seconds(60), "1m")
        self.assertEqual(format_seconds(0), "0s")

    def test_format_days(self):
        self.assertEqual(format_days(2_500_000), "28d 22h")
        self.assertEqual(format_days(86_400), "1d")
        self.assertEqual(format_days(3_600), "1h")
        self.assertEqual(format_days(100), "0h")
        self.assertEqual(format_days(0), "0d")


if __name__ == "__main__":
    unittest.main()
