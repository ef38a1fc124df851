"""Placeholder cell names.

A library-derived cell that is left out of an exported layout keeps only its
name, rewritten as::

    <library>___<original-name>

so the relinker can tell, after reload, which library and which cell the
placeholder stands for.  Names are split on the *first* separator.  Names
that contain the separator, and library names ending in ``_``, are
rejected on encode, which keeps the round trip lossless.
"""

from __future__ import annotations

from typing import NamedTuple

from libmanager.config import RULES
from libmanager.errors import InvalidNameError

SEPARATOR = RULES.separator


class PlaceholderName(NamedTuple):
    """The ``(library, cell)`` pair recovered from a placeholder name."""

    library_name: str
    cell_name: str


def validate_name(name: str, what: str = "name") -> None:
    """Raise InvalidNameError unless *name* can take part in an encoding."""
    if not isinstance(name, str) or not name.strip():
        raise InvalidNameError(str(name), f"{what} must not be empty")
    if SEPARATOR in name:
        raise InvalidNameError(name, f"{what} must not contain '{SEPARATOR}'")


def validate_library_name(name: str) -> None:
    """validate_name, plus the name must not end in ``_``.

    ``encode("x_", "y")`` would otherwise decode as ``("x", "_y")``.
    """
    validate_name(name, "library name")
    if name.endswith(SEPARATOR[-1]):
        raise InvalidNameError(name, f"library name must not end with '{SEPARATOR[-1]}'")


def encode(library_name: str, cell_name: str) -> str:
    """Return the placeholder name for *cell_name* from *library_name*."""
    validate_library_name(library_name)
    validate_name(cell_name, "cell name")
    return f"{library_name}{SEPARATOR}{cell_name}"


def decode(qualified_name: str) -> PlaceholderName | None:
    """Split a placeholder name, or return None if it is not one."""
    library_name, sep, cell_name = qualified_name.partition(SEPARATOR)
    if not sep or not library_name or not cell_name:
        return None
    return PlaceholderName(library_name, cell_name)


def is_placeholder(qualified_name: str) -> bool:
    return decode(qualified_name) is not None
