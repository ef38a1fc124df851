"""Reading and writing layouts through KLayout."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import klayout.db as kdb

from libmanager.config import RULES
from libmanager.errors import LibraryManagerError, WriteError

log = logging.getLogger(__name__)


def new_layout() -> kdb.Layout:
    """An empty layout in editable mode.

    Editable mode keeps Instance handles valid while the owning cell gets
    new instances, which the relinker relies on.
    """
    return kdb.Layout(True)


def open_layout(path: Path | str) -> kdb.Layout:
    """Read a GDS2/OASIS file into a new editable layout."""
    p = Path(path)
    if not p.exists():
        raise LibraryManagerError(f"Layout file not found: {p}")
    layout = new_layout()
    try:
        layout.read(str(p))
    except RuntimeError as exc:
        raise LibraryManagerError(f"Cannot read layout {p}: {exc}") from exc
    log.info("Opened %s (%d cells)", p, layout.cells())
    return layout


def save_options(
    path: Path | str,
    cells: Iterable[int] | None = None,
    keep_instances: bool = False,
) -> kdb.SaveLayoutOptions:
    """Writer options for *path*.

    With *cells* given, only those cells are written (children are not
    pulled in).  *keep_instances* keeps placements of unwritten cells as
    bare name references instead of dropping them.
    """
    opts = kdb.SaveLayoutOptions()
    fmt = RULES.format_for(Path(path))
    if fmt:
        opts.format = fmt
    else:
        opts.set_format_from_filename(str(path))
    opts.select_all_layers()

    if cells is not None:
        opts.clear_cells()
        for ci in cells:
            opts.add_this_cell(ci)
        opts.keep_instances = keep_instances
        # No library context: unwritten cells must come back as plain names
        opts.write_context_info = False
    return opts


def write_layout(
    layout: kdb.Layout,
    path: Path | str,
    options: kdb.SaveLayoutOptions | None = None,
) -> Path:
    """Write *layout* to *path*. Raises WriteError on failure."""
    p = Path(path)
    if not p.parent.exists():
        raise WriteError(str(p), f"folder {p.parent} does not exist")
    opts = options or save_options(p)
    try:
        layout.write(str(p), opts)
    except (RuntimeError, OSError) as exc:
        raise WriteError(str(p), str(exc)) from exc
    log.info("Layout saved to %s", p)
    return p
