"""Tests for placeholder naming (``<library>___<cell>``)."""

from __future__ import annotations

import unittest

from libmanager.errors import InvalidNameError
from libmanager.naming import PlaceholderName, SEPARATOR, decode, encode, is_placeholder


class TestEncode(unittest.TestCase):

    def test_encode_joins_with_separator(self):
        self.assertEqual(encode("analog", "opamp"), "analog___opamp")

    def test_round_trip(self):
        """decode(encode(lib, cell)) == (lib, cell) for separator-free names."""
        samples = [
            ("analog", "opamp"),
            ("io", "PAD_80x80"),
            ("lib.v2", "cell$1"),
            ("a", "b"),
            ("sky130_fd_sc_hd", "sky130_fd_sc_hd__inv_1"),   # double underscore is fine
            ("x", "_y"),
            ("x__y", "z"),
        ]
        for lib, cell in samples:
            with self.subTest(lib=lib, cell=cell):
                self.assertEqual(decode(encode(lib, cell)), (lib, cell))

    def test_rejects_separator_in_library_name(self):
        with self.assertRaises(InvalidNameError):
            encode("ana___log", "opamp")

    def test_rejects_library_name_ending_in_underscore(self):
        # "x_" + "___" + "_y" would decode as ("x", "__y")
        for lib in ("x_", "analog__"):
            with self.subTest(lib=lib):
                with self.assertRaises(InvalidNameError):
                    encode(lib, "_y")

    def test_rejects_separator_in_cell_name(self):
        with self.assertRaises(InvalidNameError) as ctx:
            encode("analog", "op___amp")
        self.assertEqual(ctx.exception.name, "op___amp")

    def test_rejects_empty_names(self):
        for lib, cell in (("", "opamp"), ("analog", ""), ("  ", "opamp")):
            with self.subTest(lib=lib, cell=cell):
                with self.assertRaises(InvalidNameError):
                    encode(lib, cell)

    def test_invalid_name_is_a_value_error(self):
        with self.assertRaises(ValueError):
            encode("", "x")


class TestDecode(unittest.TestCase):

    def test_plain_name_is_not_a_placeholder(self):
        self.assertIsNone(decode("opamp"))
        self.assertFalse(is_placeholder("opamp"))

    def test_library_qualified_name_is_not_a_placeholder(self):
        self.assertIsNone(decode("analog.opamp"))

    def test_splits_on_first_separator(self):
        self.assertEqual(decode("analog___opamp___v2"), PlaceholderName("analog", "opamp___v2"))

    def test_empty_sides_are_rejected(self):
        self.assertIsNone(decode(SEPARATOR + "opamp"))
        self.assertIsNone(decode("analog" + SEPARATOR))
        self.assertIsNone(decode(SEPARATOR))

    def test_named_fields(self):
        name = decode("analog___opamp")
        self.assertEqual(name.library_name, "analog")
        self.assertEqual(name.cell_name, "opamp")
        self.assertTrue(is_placeholder("analog___opamp"))


if __name__ == "__main__":
    unittest.main()
