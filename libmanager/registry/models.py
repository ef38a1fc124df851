"""Registry dataclasses — registered libraries and load results."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import klayout.db as kdb


@dataclass
class Library:
    """A registered library: a name and the layout that holds its cells."""

    name: str
    handle: kdb.Library
    path: Path | None = None
    description: str = ""

    @property
    def layout(self) -> kdb.Layout:
        return self.handle.layout()

    def cell(self, cell_name: str) -> kdb.Cell | None:
        """Look up a cell of this library by name. Returns None if absent."""
        return self.layout.cell(cell_name)

    def cell_names(self) -> list[str]:
        return sorted(c.name for c in self.layout.each_cell())


@dataclass
class LoadIssue:
    name: str
    path: str
    message: str

    def __str__(self) -> str:
        return f"[{self.name or '<empty>'}] {self.path}: {self.message}"


@dataclass
class LoadResult:
    """Result of loading a library map — registered names + skipped entries."""
    registered: list[str] = field(default_factory=list)
    issues: list[LoadIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return len(self.issues) == 0

    @property
    def count(self) -> int:
        return len(self.registered)
