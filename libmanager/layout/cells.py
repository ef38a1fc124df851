"""Cell classification and reference bookkeeping."""

from __future__ import annotations

from collections import Counter
from typing import Callable

import klayout.db as kdb

from libmanager.naming import decode

CellPredicate = Callable[[kdb.Cell], bool]


def is_library_derived(cell: kdb.Cell) -> bool:
    """True for library proxies and any other proxy cell (e.g. PCell variants)."""
    return cell.is_library_cell() or cell.is_proxy()


def library_cells(layout: kdb.Layout, predicate: CellPredicate = is_library_derived) -> list[kdb.Cell]:
    return [c for c in layout.each_cell() if predicate(c)]


def placeholder_cells(layout: kdb.Layout) -> list[kdb.Cell]:
    """Non-proxy cells whose qualified name decodes as a placeholder."""
    return [c for c in layout.each_cell() if not c.is_proxy() and decode(c.qname()) is not None]


def reference_counts(layout: kdb.Layout) -> Counter[int]:
    """Number of instances referencing each cell index.

    Counted from the instance lists themselves, so it is exact even while a
    change bracket is open.
    """
    counts: Counter[int] = Counter()
    for cell in layout.each_cell():
        for inst in cell.each_inst():
            counts[inst.cell_index] += 1
    return counts


def library_name_of(cell: kdb.Cell, library_names: dict[str, str] | None = None) -> str | None:
    """Library a library-derived cell comes from.

    Library proxies carry it in their qualified name (``LIB.cell``); other
    cells are looked up by name in the caller-supplied *library_names*.
    """
    if cell.is_library_cell():
        qname = cell.qname()
        if "." in qname:
            return qname.split(".", 1)[0]
        lib = cell.library()
        if lib is not None:
            return lib.name()
    if library_names:
        return library_names.get(cell.name)
    return None


def original_name_of(cell: kdb.Cell) -> str:
    """Name of the cell inside its library (without any ``$n`` suffix)."""
    if cell.is_library_cell():
        return cell.basic_name()
    return cell.name
