"""Error taxonomy for library loading, export and relink.

Every error carries a short ``title`` used when the host reports it to the
user.  None of them is fatal to the host process.
"""

from __future__ import annotations


class LibraryManagerError(Exception):
    """Base class for all reported library-manager failures."""

    title = "Library Manager"


class ConfigError(LibraryManagerError):
    """The library map is missing, unreadable, or not a non-empty object."""

    title = "Invalid Library Map"


class NoActiveLayoutError(LibraryManagerError):
    """An operation needs a layout but none is open."""

    title = "No Layout Open"

    def __init__(self, message: str = "No layout open!") -> None:
        super().__init__(message)


class InvalidNameError(LibraryManagerError, ValueError):
    """A library or cell name cannot be encoded unambiguously."""

    title = "Invalid Name"

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid name {name!r}: {reason}")


class WriteError(LibraryManagerError):
    """The layout could not be written to the destination path.

    Cell renames done before the write are not rolled back.
    """

    title = "Save Failed"

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot write '{path}': {reason}")


class PartialRelinkWarning(UserWarning):
    """Some placeholders had no matching registered library cell.

    Attached to a relink result; never raised by the relinker itself.
    """

    def __init__(self, unresolved: list[str], relinked: int) -> None:
        self.unresolved = list(unresolved)
        self.relinked = relinked
        super().__init__(
            f"Relinked {relinked} instance(s); {len(self.unresolved)} placeholder(s) "
            f"left unresolved: {', '.join(self.unresolved)}"
        )
