"""Deep prune — remove every library/proxy cell from a layout."""

from __future__ import annotations

import logging

import klayout.db as kdb

from libmanager.layout import is_library_derived
from libmanager.layout.cells import CellPredicate

from .models import PruneResult

log = logging.getLogger(__name__)


def prune_library_cells(
    layout: kdb.Layout,
    predicate: CellPredicate = is_library_derived,
) -> PruneResult:
    """Delete all cells matching *predicate*, together with their instances.

    Unlike the relinker this removes cells that are still referenced: the
    instances pointing at them go too.
    """
    cells = [c for c in layout.each_cell() if predicate(c)]
    if not cells:
        return PruneResult(message="No library/proxy cells found.")

    indices = []
    names = []
    for c in cells:
        log.info("Preparing to delete cell: name='%s', qname='%s', idx=%d",
                 c.name, c.qname(), c.cell_index())
        indices.append(c.cell_index())
        names.append(c.name)

    # Proxy cells must not be deleted inside start_changes/end_changes.
    layout.delete_cells(indices)
    layout.update()

    return PruneResult(deleted=names, message="Deep prune completed.")
