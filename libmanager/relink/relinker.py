"""Instance relinker — turn placeholders back into library cells.

After a library-filtered layout is reopened, every cell named
``<library>___<cell>`` is a placeholder for ``cell`` of ``library``.  The
relinker:

  1. decodes every cell's qualified name into candidates,
  2. resolves each candidate against the registry (missing library or cell
     → skipped, not an error),
  3. imports each resolved library cell once (``Layout.add_lib_cell``),
  4. rewrites every instance of a resolved placeholder to point at the
     imported cell, keeping its transform, array and properties,
  5. deletes the placeholders nobody references any more.

Steps 4–5 run inside one ``start_changes``/``end_changes`` bracket.
Instances are collected before any is replaced.
"""

from __future__ import annotations

import logging

import klayout.db as kdb

from libmanager.layout import reference_counts
from libmanager.naming import PlaceholderName, decode
from libmanager.registry import LibraryRegistry

from .models import RelinkCandidate, SkippedCandidate, RelinkResult

log = logging.getLogger(__name__)


class InstanceRelinker:
    """Relinks the placeholders of one layout against one registry."""

    def __init__(self, layout: kdb.Layout, registry: LibraryRegistry) -> None:
        self.layout = layout
        self.registry = registry

    def candidates(self) -> list[RelinkCandidate]:
        """Non-proxy cells whose qualified name decodes as a placeholder."""
        out: list[RelinkCandidate] = []
        for cell in self.layout.each_cell():
            if cell.is_proxy():
                continue
            target = decode(cell.qname())
            if target is not None:
                out.append(RelinkCandidate(cell.cell_index(), cell.name, target))
        return out

    def resolve(self, candidates: list[RelinkCandidate], result: RelinkResult) -> dict[int, int]:
        """Import the library cell for every resolvable candidate.

        Returns the placeholder → imported cell index mapping.  Skipped
        candidates are recorded on *result*.
        """
        mapping: dict[int, int] = {}
        imported: dict[PlaceholderName, int] = {}

        for cand in candidates:
            lib_name, cell_name = cand.target
            found = self.registry.resolve(lib_name, cell_name)
            if found is None:
                reason = "cell" if lib_name in self.registry else "library"
                skip = SkippedCandidate(cand, reason)
                log.warning("Cannot relink %s", skip)
                result.skipped.append(skip)
                continue

            if cand.target not in imported:
                lib, lib_cell = found
                imported[cand.target] = self.layout.add_lib_cell(lib.handle, lib_cell.cell_index())
                log.info("Imported %s.%s as idx=%d", lib_name, cell_name, imported[cand.target])
            mapping[cand.cell_index] = imported[cand.target]

        return mapping

    def _pending(self, mapping: dict[int, int]) -> list[tuple[kdb.Cell, kdb.Instance]]:
        """Every (parent, instance) pair whose instance targets a mapped placeholder."""
        pending: list[tuple[kdb.Cell, kdb.Instance]] = []
        for parent in self.layout.each_cell():
            for inst in parent.each_inst():
                if inst.cell_index in mapping:
                    pending.append((parent, inst))
        return pending

    @staticmethod
    def _replace(parent: kdb.Cell, inst: kdb.Instance, target: int) -> kdb.Instance:
        """Insert a copy of *inst* pointing at *target*, then delete *inst*."""
        cia = inst.cell_inst.dup()
        cia.cell_index = target
        if inst.prop_id:
            new_inst = parent.insert(cia, inst.prop_id)
        else:
            new_inst = parent.insert(cia)
        inst.delete()
        return new_inst

    def run(self) -> RelinkResult:
        result = RelinkResult()
        result.mapping = self.resolve(self.candidates(), result)

        if not result.mapping:
            result.message = "No matching library cells found."
            log.info(result.message)
            return result

        self.layout.start_changes()
        try:
            pending = self._pending(result.mapping)
            for parent, inst in pending:
                old = inst.cell_index
                self._replace(parent, inst, result.mapping[old])
                log.debug("Relinked instance in '%s': idx=%d -> idx=%d",
                          parent.name, old, result.mapping[old])
            result.relinked = len(pending)

            refs = reference_counts(self.layout)
            for placeholder in result.mapping:
                if refs[placeholder] == 0:
                    name = self.layout.cell(placeholder).name
                    self.layout.delete_cell(placeholder)
                    result.deleted_placeholders.append(name)
                    log.info("Deleted placeholder '%s'", name)
        finally:
            self.layout.end_changes()

        self.layout.update()
        result.message = f"Relinked {result.relinked} instance(s)."
        if result.partial:
            result.message += f" {len(result.skipped)} placeholder(s) left unresolved."
        log.info(result.message)
        return result


def relink_layout(layout: kdb.Layout, registry: LibraryRegistry) -> RelinkResult:
    return InstanceRelinker(layout, registry).run()
