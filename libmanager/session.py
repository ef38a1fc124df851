"""
Session — the host-side state every library-manager action works against.

A session holds:
  registry   — the libraries registered so far (lives as long as the session)
  layout     — the currently open layout, if any, and the file it came from
  messages   — what the user has been told (info / warning / critical)

Actions mirror the desktop menu: Load Libraries, Open, Save Library-Filtered
Layout, Relink, Prune Library Cells.  Each one reports its outcome as a
message; failures are reported and then re-raised to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import klayout.db as kdb

from libmanager.errors import LibraryManagerError, NoActiveLayoutError
from libmanager.export import ExportResult, FilteredExporter
from libmanager.layout import open_layout, write_layout
from libmanager.registry import LibraryRegistry, LoadResult, load_library_map
from libmanager.relink import InstanceRelinker, PruneResult, RelinkResult, prune_library_cells

log = logging.getLogger(__name__)

TITLE = "Library Manager"


@dataclass
class Message:
    level: str                           # "info" | "warning" | "critical"
    title: str
    text: str


class LayoutSession:
    def __init__(self, registry: LibraryRegistry | None = None) -> None:
        self.registry = registry if registry is not None else LibraryRegistry()
        self.layout: kdb.Layout | None = None
        self.path: Path | None = None
        self.messages: list[Message] = []

    # ── Messages ───────────────────────────────────────────────────

    def _say(self, level: str, text: str, title: str = TITLE) -> Message:
        msg = Message(level, title, text)
        self.messages.append(msg)
        log.log(
            {"info": logging.INFO, "warning": logging.WARNING}.get(level, logging.ERROR),
            "%s: %s", title, text,
        )
        return msg

    def info(self, text: str, title: str = TITLE) -> Message:
        return self._say("info", text, title)

    def warning(self, text: str, title: str = TITLE) -> Message:
        return self._say("warning", text, title)

    def critical(self, text: str, title: str = TITLE) -> Message:
        return self._say("critical", text, title)

    def _report(self, exc: LibraryManagerError) -> None:
        level = "warning" if isinstance(exc, NoActiveLayoutError) else "critical"
        self._say(level, str(exc), exc.title)

    # ── Layout ─────────────────────────────────────────────────────

    def current_layout(self) -> kdb.Layout:
        """The open layout. Raises NoActiveLayoutError if there is none."""
        if self.layout is None:
            exc = NoActiveLayoutError()
            self._report(exc)
            raise exc
        return self.layout

    def open(self, path: Path | str) -> kdb.Layout:
        try:
            layout = open_layout(path)
        except LibraryManagerError as exc:
            self._report(exc)
            raise
        self.layout = layout
        self.path = Path(path)
        return layout

    def attach(self, layout: kdb.Layout, path: Path | str | None = None) -> None:
        """Make an in-memory layout the current one."""
        self.layout = layout
        self.path = Path(path) if path is not None else None

    def close(self) -> None:
        self.layout = None
        self.path = None

    # ── Actions ────────────────────────────────────────────────────

    def load_libraries(self, map_path: Path | str | None = None) -> LoadResult:
        try:
            result = load_library_map(map_path, self.registry)
        except LibraryManagerError as exc:
            self._report(exc)
            raise
        for issue in result.issues:
            self.warning(f"Skipped library entry {issue}")
        self.info(f"Loaded {result.count} libraries.")
        return result

    def export(self, path: Path | str, library_names: dict[str, str] | None = None) -> ExportResult:
        """Save the current layout without library geometry."""
        layout = self.current_layout()
        try:
            result = FilteredExporter(layout, library_names).export(path)
        except LibraryManagerError as exc:
            self._report(exc)
            raise
        for text in result.messages:
            self.info(text)
        for s in result.plan.skipped:
            self.warning(f"Cell '{s.name}' kept in the file: {s.reason}")
        return result

    def relink(self) -> RelinkResult:
        """Relink the current layout's placeholders against the registry."""
        layout = self.current_layout()
        result = InstanceRelinker(layout, self.registry).run()
        if result.partial:
            self.warning(str(result.warning))
        else:
            self.info(result.message)
        return result

    def open_and_relink(self, path: Path | str) -> RelinkResult:
        self.open(path)
        return self.relink()

    def prune(self) -> PruneResult:
        layout = self.current_layout()
        result = prune_library_cells(layout)
        self.info(result.message)
        return result

    def save(self, path: Path | str | None = None) -> Path:
        """Plain save of the current layout (everything, no filtering)."""
        layout = self.current_layout()
        target = Path(path) if path is not None else self.path
        if target is None:
            exc = LibraryManagerError("No file name given for save.")
            self._report(exc)
            raise exc
        try:
            written = write_layout(layout, target)
        except LibraryManagerError as exc:
            self._report(exc)
            raise
        self.path = written
        return written
