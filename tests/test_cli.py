"""Tests for the command-line entry point."""

from __future__ import annotations

import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from libmanager.__main__ import _library_names, _positionals, _run, main
from libmanager.errors import LibraryManagerError
from libmanager.layout import open_layout, placeholder_cells, write_layout
from tests.layout_fixture import (
    make_library_layout, make_native_design, make_placeholder_design, unique_name,
)


class TestArgumentHelpers(unittest.TestCase):

    def test_positionals_skip_option_values(self):
        self.assertEqual(_positionals(["a.gds", "--libs", "x.json", "b.gds"]), ["a.gds", "b.gds"])

    def test_positionals_skip_flags(self):
        self.assertEqual(_positionals(["--dry-run", "a.gds", "--lib", "x=y"]), ["a.gds"])

    def test_library_names(self):
        self.assertEqual(_library_names(["pad=io", "dac=analog"]), {"pad": "io", "dac": "analog"})
        with self.assertRaises(LibraryManagerError):
            _library_names(["pad"])


class TestCommands(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_relink_command(self):
        name = unique_name("cli")
        write_layout(make_library_layout(), self.tmp / "lib.gds")
        (self.tmp / "libs.json").write_text(json.dumps({name: "lib.gds"}), encoding="utf-8")
        write_layout(make_placeholder_design(name), self.tmp / "in.gds")

        code = _run("relink", [str(self.tmp / "in.gds"), str(self.tmp / "out.gds"),
                               "--libs", str(self.tmp / "libs.json")])
        self.assertEqual(code, 0)
        self.assertEqual(placeholder_cells(open_layout(self.tmp / "out.gds")), [])

    def test_export_dry_run_writes_nothing(self):
        write_layout(make_native_design(), self.tmp / "in.gds")
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            code = _run("export", [str(self.tmp / "in.gds"), "--dry-run"])
        self.assertEqual(code, 0)
        self.assertIn("Would exclude 0 cell(s)", out.getvalue())
        self.assertEqual(sorted(p.name for p in self.tmp.iterdir()), ["in.gds"])

    def test_missing_arguments(self):
        self.assertEqual(_run("prune", ["only_one.gds"]), 1)

    def test_unknown_command_exits_nonzero(self):
        with mock.patch("sys.argv", ["libmanager", "frobnicate", "a.gds", "b.gds"]):
            with self.assertRaises(SystemExit) as ctx:
                main()
        self.assertEqual(ctx.exception.code, 1)

    def test_config_error_exits_nonzero(self):
        argv = ["libmanager", "libraries", "--libs", str(self.tmp / "missing.json")]
        with mock.patch("sys.argv", argv):
            with self.assertRaises(SystemExit) as ctx:
                main()
        self.assertEqual(ctx.exception.code, 1)


if __name__ == "__main__":
    unittest.main()
