"""The library registry.

One ``LibraryRegistry`` lives for the whole session and is handed to the
loader and the relinker explicitly.  Registering a name that already exists
replaces the previous library (last write wins), both here and in KLayout's
own library table, which ``Layout.add_lib_cell`` proxies refer to.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import klayout.db as kdb

from libmanager.config import RULES
from libmanager.naming import validate_library_name

from .models import Library

log = logging.getLogger(__name__)


class LibraryRegistry:
    """Maps library name → registered Library."""

    def __init__(self) -> None:
        self._libraries: dict[str, Library] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._libraries

    def __iter__(self) -> Iterator[Library]:
        return iter(self._libraries.values())

    def __len__(self) -> int:
        return len(self._libraries)

    def get(self, name: str) -> Library | None:
        return self._libraries.get(name)

    def names(self) -> list[str]:
        return sorted(self._libraries)

    def register(
        self,
        name: str,
        layout: kdb.Layout | None = None,
        path: Path | str | None = None,
        description: str | None = None,
    ) -> Library:
        """Create and register a library called *name*.

        The library layout is read from *path* when given, otherwise the
        cells of *layout* are copied in (an empty layout if neither).
        Raises InvalidNameError for names that would make placeholder names
        ambiguous.
        """
        validate_library_name(name)

        handle = kdb.Library()
        handle.description = description or RULES.describe(name)
        if path is not None:
            handle.layout().read(str(path))
        elif layout is not None:
            handle.layout().assign(layout)
        handle.register(name)

        lib = Library(
            name=name,
            handle=handle,
            path=Path(path) if path is not None else None,
            description=handle.description,
        )
        if name in self._libraries:
            log.info("Replacing library '%s'", name)
        self._libraries[name] = lib
        return lib

    def unregister(self, name: str) -> bool:
        """Forget *name*. Returns True if it was registered."""
        lib = self._libraries.pop(name, None)
        if lib is None:
            return False
        lib.handle.unregister()
        return True

    def resolve(self, library_name: str, cell_name: str) -> tuple[Library, kdb.Cell] | None:
        """Find *cell_name* in *library_name*. Returns None if either is missing."""
        lib = self._libraries.get(library_name)
        if lib is None:
            return None
        cell = lib.cell(cell_name)
        if cell is None:
            return None
        return lib, cell
