# tests/test_normalize.py
from __future__ import annotations

import unittest

from gplus_archive.normalize import (
    clean_location,
    clean_title,
    convert_to_utc,
    escape_metadata,
    filename_date_prefix,
    normalize_filename_stem,
)


class TestConvertToUtc(unittest.TestCase):
    def test_offsets(self) -> None:
        self.assertEqual(convert_to_utc("2011-08-14 20:39:28-0700"), "2011-08-15T03:39:28Z")
        self.assertEqual(convert_to_utc("2024-01-15 14:30:00+0530"), "2024-01-15T09:00:00Z")
        self.assertEqual(convert_to_utc("2024-06-15 12:00:00+0000"), "2024-06-15T12:00:00Z")
        self.assertEqual(convert_to_utc("2024-01-16 02:00:00+0530"), "2024-01-15T20:30:00Z")

    def test_unparseable_input_is_returned_unchanged(self) -> None:
        for value in ["not a date", "", "2024-01-15T14:30:00Z", "2024-1-5 1:2:3-0700", "2024-02-30 10:00:00+0000"]:
            self.assertEqual(convert_to_utc(value), value)

    def test_out_of_range_shift_is_returned_unchanged(self) -> None:
        for value in ["9999-12-31 23:59:59-0100", "0001-01-01 00:00:00+0100"]:
            self.assertEqual(convert_to_utc(value), value)

    def test_non_ascii_digits_are_not_parsed(self) -> None:
        value = "\u0662\u0660\u0661\u0661-08-14 20:39:28-0700"
        self.assertEqual(convert_to_utc(value), value)

    def test_early_years_stay_four_digits(self) -> None:
        self.assertEqual(convert_to_utc("0999-06-01 12:00:00+0000"), "0999-06-01T12:00:00Z")
        self.assertEqual(convert_to_utc("0050-01-01 01:00:00+0200"), "0049-12-31T23:00:00Z")


class TestFilenameStem(unittest.TestCase):
    def test_dated_names(self) -> None:
        self.assertEqual(
            normalize_filename_stem("20110814 - Today is my first day"),
            "2011-08-14-Today_is_my_first_day",
        )
        self.assertEqual(normalize_filename_stem("20110814Today"), "2011-08-14-Today")
        self.assertEqual(normalize_filename_stem("20110814"), "2011-08-14-")

    def test_undated_names(self) -> None:
        self.assertEqual(
            normalize_filename_stem("My post @home about #things!"),
            "My_post_home_about_things",
        )
        self.assertEqual(normalize_filename_stem("short"), "short")
        self.assertEqual(normalize_filename_stem("2011081 - test"), "2011081_-_test")

    def test_date_prefix(self) -> None:
        self.assertEqual(filename_date_prefix("20110814 - x"), "2011-08-14")
        self.assertEqual(filename_date_prefix("x20110814"), "")


class TestEscapeMetadata(unittest.TestCase):
    def test_quote_backslash_newline(self) -> None:
        self.assertEqual(escape_metadata('He said "hi"\\\nbye'), 'He said \\"hi\\"\\\\ bye')

    def test_carriage_returns(self) -> None:
        self.assertEqual(escape_metadata("a\r\nb"), "a  b")

    def test_unicode_passthrough(self) -> None:
        self.assertEqual(escape_metadata("Hello 👋 世界"), "Hello 👋 世界")


class TestCleaners(unittest.TestCase):
    def test_location_inserts_space_before_address(self) -> None:
        self.assertEqual(
            clean_location("Cafe CentralAddress: 1 Main St"),
            "Cafe Central Address: 1 Main St",
        )

    def test_location_left_alone_when_spaced_or_leading(self) -> None:
        self.assertEqual(clean_location("Cafe Address: 1"), "Cafe Address: 1")
        self.assertEqual(clean_location("Address: 1"), "Address: 1")
        self.assertEqual(clean_location("Home"), "Home")

    def test_location_only_first_occurrence(self) -> None:
        self.assertEqual(clean_location("AAddressBAddress"), "A AddressBAddress")

    def test_clean_title(self) -> None:
        self.assertEqual(clean_title("Hello <b>world</b>"), "Hello world")
        self.assertEqual(clean_title("Tom &amp; Jerry"), "Tom & Jerry")
        self.assertEqual(clean_title("  spaced \n out "), "spaced out")


if __name__ == "__main__":
    unittest.main()
