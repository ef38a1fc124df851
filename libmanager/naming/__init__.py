"""Placeholder naming — ``<library>___<original-name>`` encode/decode."""

from .codec import (
    PlaceholderName, SEPARATOR, encode, decode, is_placeholder, validate_name, validate_library_name,
)

__all__ = [
    "PlaceholderName", "SEPARATOR",
    "encode", "decode", "is_placeholder", "validate_name", "validate_library_name",
]
