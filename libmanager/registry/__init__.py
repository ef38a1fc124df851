"""Library registry — load libs.json and keep the registered libraries."""

from .models import Library, LoadIssue, LoadResult
from .registry import LibraryRegistry
from .loader import read_library_map, load_libraries, load_library_map, resolve_map_path

__all__ = [
    # Models
    "Library", "LoadIssue", "LoadResult",
    # Registry
    "LibraryRegistry",
    # Loader
    "read_library_map", "load_libraries", "load_library_map", "resolve_map_path",
]
