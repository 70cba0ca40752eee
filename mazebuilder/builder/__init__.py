"""Builder — finds tower placements that make the maze as long as possible.

Submodules:
  models        Output dataclasses, configuration and search state.
  engine        Cutoff-pruned recursive placement search.
  serialization JSON conversion (result_to_dict, parse_result).
"""

from .models import BuildResult, BuilderConfig, SearchState
from .engine import build_towers
from .serialization import result_to_dict, parse_result

__all__ = [
    # Models
    "BuildResult", "BuilderConfig", "SearchState",
    # Engine
    "build_towers",
    # Serialization
    "result_to_dict", "parse_result",
]
