"""Relink — replace placeholder cells with the real library cells.

Submodules:
  models        Candidate / result dataclasses.
  relinker      The relink algorithm (InstanceRelinker).
  prune         Delete every library/proxy cell from a layout.
  serialization JSON conversion of results.
"""

from .models import RelinkCandidate, SkippedCandidate, RelinkResult, PruneResult
from .relinker import InstanceRelinker, relink_layout
from .prune import prune_library_cells
from .serialization import relink_to_dict, prune_to_dict

__all__ = [
    # Models
    "RelinkCandidate", "SkippedCandidate", "RelinkResult", "PruneResult",
    # Relinker
    "InstanceRelinker", "relink_layout",
    # Prune
    "prune_library_cells",
    # Serialization
    "relink_to_dict", "prune_to_dict",
]
