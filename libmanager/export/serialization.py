"""Export result serialization — JSON-safe dicts for the web API."""

from __future__ import annotations

from .models import ExportResult


def export_to_dict(result: ExportResult) -> dict:
    return {
        "path": str(result.path) if result.path else None,
        "written": result.written,
        "full_save": result.full_save,
        "selected": result.plan.selected,
        "excluded": result.plan.excluded,
        "renamed": [
            {"index": r.cell_index, "old_name": r.old_name, "new_name": r.new_name}
            for r in result.renamed
        ],
        "skipped": [
            {"index": s.cell_index, "name": s.name, "reason": s.reason}
            for s in result.plan.skipped
        ],
        "messages": result.messages,
    }
