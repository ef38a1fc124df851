"""Export dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class CellRename:
    cell_index: int
    old_name: str
    new_name: str


@dataclass
class SkippedCell:
    """A library-derived cell that could not be given a placeholder name."""
    cell_index: int
    name: str
    reason: str


@dataclass
class ExportPlan:
    """What an export will do, computed before anything is touched."""

    renames: list[CellRename]
    selected: list[int]                 # cell indices written with geometry
    excluded: list[int]                 # library-derived cells, name only
    skipped: list[SkippedCell] = field(default_factory=list)

    @property
    def full_save(self) -> bool:
        """True when there is nothing to exclude."""
        return not self.excluded


@dataclass
class ExportResult:
    plan: ExportPlan
    path: Path | None = None
    renamed: list[CellRename] = field(default_factory=list)
    written: bool = False
    messages: list[str] = field(default_factory=list)

    @property
    def full_save(self) -> bool:
        return self.plan.full_save
