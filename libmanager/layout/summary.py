"""Layout summary — JSON-safe view of a layout for the web API and CLI."""

from __future__ import annotations

from typing import Any

import klayout.db as kdb
from shapely.geometry import box, mapping

from libmanager.naming import decode

from .cells import is_library_derived, reference_counts


def cell_to_dict(cell: kdb.Cell, references: int = 0) -> dict:
    """Serialize one cell. The bounding box is a GeoJSON polygon in µm (None if empty)."""
    bbox = cell.dbbox()
    placeholder = None if cell.is_proxy() else decode(cell.qname())
    d: dict[str, Any] = {
        "index": cell.cell_index(),
        "name": cell.name,
        "qname": cell.qname(),
        "library_derived": is_library_derived(cell),
        "top": cell.is_top(),
        "references": references,
        "instances": cell.child_instances(),
        "bbox": None if bbox.empty() else mapping(box(bbox.left, bbox.bottom, bbox.right, bbox.top)),
    }
    if placeholder:
        d["placeholder"] = {
            "library": placeholder.library_name,
            "cell": placeholder.cell_name,
        }
    return d


def layout_summary(layout: kdb.Layout) -> dict:
    """Serialize a layout's cells, top cells, and placeholder count."""
    refs = reference_counts(layout)
    cells = [cell_to_dict(c, refs[c.cell_index()]) for c in layout.each_cell()]
    return {
        "dbu": layout.dbu,
        "cell_count": len(cells),
        "top_cells": [c.name for c in layout.top_cells()],
        "placeholders": sum(1 for c in cells if "placeholder" in c),
        "cells": cells,
    }
