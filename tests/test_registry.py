"""Tests for the library registry and the libs.json loader."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from libmanager.errors import ConfigError, InvalidNameError
from libmanager.layout import write_layout
from libmanager.registry import (
    LibraryRegistry, load_libraries, load_library_map, read_library_map, resolve_map_path,
)
from tests.layout_fixture import make_library_layout, unique_name


class TestLibraryRegistry(unittest.TestCase):

    def setUp(self):
        self.registry = LibraryRegistry()
        self.name = unique_name("reg")

    def test_register_from_layout(self):
        lib = self.registry.register(self.name, layout=make_library_layout())
        self.assertIn(self.name, self.registry)
        self.assertEqual(len(self.registry), 1)
        self.assertEqual(lib.description, f"Library {self.name}")
        self.assertEqual(lib.cell_names(), ["bias", "opamp"])
        self.assertIsNotNone(lib.cell("opamp"))
        self.assertIsNone(lib.cell("missing"))

    def test_last_write_wins(self):
        self.registry.register(self.name, layout=make_library_layout())
        replacement = make_library_layout()
        replacement.create_cell("mirror")
        self.registry.register(self.name, layout=replacement)
        self.assertEqual(len(self.registry), 1)
        self.assertIn("mirror", self.registry.get(self.name).cell_names())

    def test_rejects_ambiguous_library_names(self):
        with self.assertRaises(InvalidNameError):
            self.registry.register("ana___log", layout=make_library_layout())
        with self.assertRaises(InvalidNameError):
            self.registry.register("", layout=make_library_layout())
        with self.assertRaises(InvalidNameError):
            self.registry.register("analog_", layout=make_library_layout())
        self.assertEqual(len(self.registry), 0)

    def test_resolve(self):
        self.registry.register(self.name, layout=make_library_layout())
        lib, cell = self.registry.resolve(self.name, "opamp")
        self.assertEqual(lib.name, self.name)
        self.assertEqual(cell.name, "opamp")
        self.assertIsNone(self.registry.resolve(self.name, "missing"))
        self.assertIsNone(self.registry.resolve("not_registered", "opamp"))

    def test_unregister(self):
        self.registry.register(self.name, layout=make_library_layout())
        self.assertTrue(self.registry.unregister(self.name))
        self.assertNotIn(self.name, self.registry)
        self.assertFalse(self.registry.unregister(self.name))


class TestLibraryMapLoader(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.gds = write_layout(make_library_layout(), self.tmp / "analog.gds")

    def tearDown(self):
        self._tmp.cleanup()

    def _write_map(self, data) -> Path:
        p = self.tmp / "libs.json"
        p.write_text(json.dumps(data), encoding="utf-8")
        return p

    def test_loads_valid_entries_and_skips_bad_ones(self):
        name = unique_name("loader")
        p = self._write_map({
            name: "analog.gds",                  # relative to libs.json
            "": str(self.gds),
            unique_name("gone"): str(self.tmp / "missing.gds"),
        })
        registry = LibraryRegistry()
        result = load_library_map(p, registry)

        self.assertEqual(result.registered, [name])
        self.assertEqual(result.count, 1)
        self.assertFalse(result.ok)
        self.assertEqual(len(result.issues), 2)
        lib = registry.get(name)
        self.assertEqual(lib.path.resolve(), self.gds.resolve())
        self.assertEqual(lib.cell_names(), ["bias", "opamp"])

    def test_skips_ambiguous_name(self):
        registry = LibraryRegistry()
        result = load_libraries({"bad___name": str(self.gds)}, registry)
        self.assertEqual(result.registered, [])
        self.assertEqual(len(result.issues), 1)
        self.assertEqual(len(registry), 0)

    def test_missing_file_is_config_error(self):
        with self.assertRaises(ConfigError):
            read_library_map(self.tmp / "nope.json")

    def test_invalid_json_is_config_error(self):
        p = self.tmp / "libs.json"
        p.write_text("{not json", encoding="utf-8")
        with self.assertRaises(ConfigError):
            read_library_map(p)

    def test_non_object_or_empty_is_config_error(self):
        for data in ([], {}, "analog.gds"):
            with self.subTest(data=data):
                with self.assertRaises(ConfigError):
                    read_library_map(self._write_map(data))

    def test_config_error_registers_nothing(self):
        registry = LibraryRegistry()
        with self.assertRaises(ConfigError):
            load_library_map(self._write_map({}), registry)
        self.assertEqual(len(registry), 0)

    def test_resolve_map_path(self):
        self.assertEqual(resolve_map_path("x/libs.json"), Path("x/libs.json"))


if __name__ == "__main__":
    unittest.main()
