"""Filtered export — write a layout without library-derived geometry."""

from .models import CellRename, SkippedCell, ExportPlan, ExportResult
from .exporter import FilteredExporter, export_filtered
from .serialization import export_to_dict

__all__ = [
    # Models
    "CellRename", "SkippedCell", "ExportPlan", "ExportResult",
    # Exporter
    "FilteredExporter", "export_filtered",
    # Serialization
    "export_to_dict",
]
