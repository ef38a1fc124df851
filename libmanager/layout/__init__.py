"""Layout helpers — KLayout I/O, cell classification, JSON summaries."""

from .io import new_layout, open_layout, write_layout, save_options
from .cells import (
    is_library_derived, library_cells, placeholder_cells,
    reference_counts, library_name_of, original_name_of,
)
from .summary import layout_summary, cell_to_dict

__all__ = [
    # I/O
    "new_layout", "open_layout", "write_layout", "save_options",
    # Cells
    "is_library_derived", "library_cells", "placeholder_cells",
    "reference_counts", "library_name_of", "original_name_of",
    # Summary
    "layout_summary", "cell_to_dict",
]
