"""Filtered exporter — save a layout while leaving library IP out of the file.

Export runs in two phases that can be observed separately:

  rename  — every library-derived cell is renamed to ``<library>___<cell>``
  write   — only top cells and non-library cells are written with geometry;
            instances of the excluded cells are kept as bare references

The renames are permanent: after export the in-memory layout carries the
same names as the file.  If the write fails the renames are not undone.
"""

from __future__ import annotations

import logging
from pathlib import Path

import klayout.db as kdb

from libmanager.errors import InvalidNameError
from libmanager.layout import (
    is_library_derived, library_name_of, original_name_of, save_options, write_layout,
)
from libmanager.layout.cells import CellPredicate
from libmanager.naming import encode, is_placeholder

from .models import CellRename, SkippedCell, ExportPlan, ExportResult

log = logging.getLogger(__name__)


class FilteredExporter:
    """Plans and performs a library-filtered save of one layout.

    Args:
        layout: Layout to export (mutated by the rename phase).
        library_names: ``cell name -> library name`` for library-derived
            cells whose qualified name does not say where they come from.
        predicate: Which cells count as library-derived.
    """

    def __init__(
        self,
        layout: kdb.Layout,
        library_names: dict[str, str] | None = None,
        predicate: CellPredicate = is_library_derived,
    ) -> None:
        self.layout = layout
        self.library_names = dict(library_names or {})
        self.predicate = predicate

    # ── Planning ───────────────────────────────────────────────────

    def _is_bare_placeholder(self, cell: kdb.Cell) -> bool:
        """Placeholder left over from an earlier export (no geometry of its own)."""
        if cell.is_proxy() or not is_placeholder(cell.qname()):
            return False
        return cell.is_ghost_cell() or cell.is_empty()

    def plan(self) -> ExportPlan:
        """Work out renames and the cell selection without touching the layout."""
        renames: list[CellRename] = []
        skipped: list[SkippedCell] = []
        excluded: set[int] = set()
        taken = {c.name for c in self.layout.each_cell()}

        for cell in self.layout.each_cell():
            ci = cell.cell_index()
            if self._is_bare_placeholder(cell):
                excluded.add(ci)
                continue
            if not self.predicate(cell):
                continue

            lib_name = library_name_of(cell, self.library_names)
            if lib_name is None:
                skipped.append(SkippedCell(ci, cell.name, "library unknown"))
                continue
            try:
                new_name = encode(lib_name, original_name_of(cell))
            except InvalidNameError as exc:
                skipped.append(SkippedCell(ci, cell.name, exc.reason))
                continue

            if new_name != cell.name:
                if new_name in taken:
                    skipped.append(SkippedCell(ci, cell.name, f"name '{new_name}' already in use"))
                    continue
                taken.add(new_name)
                renames.append(CellRename(ci, cell.name, new_name))
            excluded.add(ci)

        top = {c.cell_index() for c in self.layout.top_cells()}
        selected = sorted(
            c.cell_index() for c in self.layout.each_cell()
            if c.cell_index() in top or c.cell_index() not in excluded
        )
        return ExportPlan(
            renames=renames,
            selected=selected,
            excluded=sorted(excluded - top),
            skipped=skipped,
        )

    # ── Phases ─────────────────────────────────────────────────────

    def rename_phase(self, plan: ExportPlan) -> list[CellRename]:
        """Apply the planned renames. Returns the renames performed."""
        done: list[CellRename] = []
        for r in plan.renames:
            log.info("Renaming cell: idx=%d, '%s' -> '%s'", r.cell_index, r.old_name, r.new_name)
            self.layout.rename_cell(r.cell_index, r.new_name)
            done.append(r)
        for s in plan.skipped:
            log.warning("Keeping cell '%s' (idx=%d) in the file: %s", s.name, s.cell_index, s.reason)
        return done

    def write_phase(self, plan: ExportPlan, path: Path | str) -> Path:
        """Write the selection to *path*. Raises WriteError on failure."""
        if plan.full_save:
            return write_layout(self.layout, path)
        for ci in plan.excluded:
            log.info("Excluding cell: idx=%d, qname='%s'", ci, self.layout.cell(ci).qname())
        opts = save_options(path, plan.selected, keep_instances=True)
        return write_layout(self.layout, path, opts)

    def export(self, path: Path | str) -> ExportResult:
        """Rename, then write. Renames stay in place if the write fails."""
        plan = self.plan()
        result = ExportResult(plan=plan)
        if plan.full_save and not plan.renames and not plan.skipped:
            result.messages.append("No library cells found — full save.")

        result.renamed = self.rename_phase(plan)
        result.path = self.write_phase(plan, path)
        result.written = True
        result.messages.append(f"Layout saved to:\n{result.path}")
        return result


def export_filtered(
    layout: kdb.Layout,
    path: Path | str,
    library_names: dict[str, str] | None = None,
) -> ExportResult:
    """Convenience wrapper: FilteredExporter(layout, library_names).export(path)."""
    return FilteredExporter(layout, library_names).export(path)
