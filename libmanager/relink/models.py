"""Relink and prune dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field

from libmanager.errors import PartialRelinkWarning
from libmanager.naming import PlaceholderName


@dataclass
class RelinkCandidate:
    """A cell whose name decodes as a placeholder."""

    cell_index: int
    cell_name: str
    target: PlaceholderName


@dataclass
class SkippedCandidate:
    candidate: RelinkCandidate
    reason: str                         # "library" | "cell"

    def __str__(self) -> str:
        t = self.candidate.target
        if self.reason == "library":
            return f"{self.candidate.cell_name}: library '{t.library_name}' not registered"
        return f"{self.candidate.cell_name}: no cell '{t.cell_name}' in library '{t.library_name}'"


@dataclass
class RelinkResult:
    """Outcome of one relink pass."""

    relinked: int = 0
    mapping: dict[int, int] = field(default_factory=dict)   # placeholder idx -> imported idx
    skipped: list[SkippedCandidate] = field(default_factory=list)
    deleted_placeholders: list[str] = field(default_factory=list)
    message: str = ""

    @property
    def partial(self) -> bool:
        return bool(self.skipped)

    @property
    def ok(self) -> bool:
        return self.relinked > 0 and not self.skipped

    @property
    def warning(self) -> PartialRelinkWarning | None:
        if not self.skipped:
            return None
        return PartialRelinkWarning(
            [s.candidate.cell_name for s in self.skipped], self.relinked)


@dataclass
class PruneResult:
    deleted: list[str] = field(default_factory=list)
    message: str = ""

    @property
    def count(self) -> int:
        return len(self.deleted)
