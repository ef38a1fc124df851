"""Relink / prune serialization — JSON-safe dicts for the web API."""

from __future__ import annotations

from .models import RelinkResult, PruneResult


def relink_to_dict(result: RelinkResult) -> dict:
    warning = result.warning
    return {
        "relinked": result.relinked,
        "ok": result.ok,
        "partial": result.partial,
        "mapping": {str(k): v for k, v in result.mapping.items()},
        "skipped": [
            {
                "cell": s.candidate.cell_name,
                "library": s.candidate.target.library_name,
                "library_cell": s.candidate.target.cell_name,
                "reason": s.reason,
            }
            for s in result.skipped
        ],
        "deleted_placeholders": result.deleted_placeholders,
        "message": result.message,
        "warning": str(warning) if warning else None,
    }


def prune_to_dict(result: PruneResult) -> dict:
    return {
        "deleted": result.deleted,
        "count": result.count,
        "message": result.message,
    }
