"""Shared constants for naming, library loading and layout I/O.

Both the **exporter** (which writes placeholder names) and the **relinker**
(which reads them back) take the separator from this single source of truth.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class LibraryRules:
    """Naming and file conventions for library-filtered layouts."""

    separator: str = "___"
    """Joins library name and original cell name in a placeholder cell name."""

    description_template: str = "Library {name}"
    """Human-readable description given to every registered library."""

    default_map_path: Path = Path("libs.json")
    """Library map used when neither --libs nor the env variable is given."""

    map_env_var: str = "LIBMANAGER_LIBS"

    layout_formats: dict[str, str] = field(default_factory=lambda: {
        ".gds": "GDS2",
        ".gds2": "GDS2",
        ".gdsii": "GDS2",
        ".oas": "OASIS",
        ".oasis": "OASIS",
    })
    """Layout file suffix → KLayout writer format."""

    # ── Derived helpers ────────────────────────────────────────────

    def describe(self, name: str) -> str:
        return self.description_template.format(name=name)

    def format_for(self, path: Path) -> str | None:
        """Writer format for *path*, or None if the suffix is unknown."""
        return self.layout_formats.get(Path(path).suffix.lower())


# Shared instance used by naming, loader and layout I/O.
RULES = LibraryRules()
