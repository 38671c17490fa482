"""
cascade — cascading multi-level cache coordination.

    from cascade import coordinator as C  # Read/compute/write-back
    from cascade import level as V        # Level protocol + helpers
    from cascade import lift as L         # Lifting plain compute functions
"""

from cascade import coordinator
from cascade import level
from cascade import lift
from cascade._types import (
    Lazy,
    Pure,
    Fallible,
)

__version__ = "0.1.0"

__all__ = (
    "coordinator",
    "level",
    "lift",
    "Lazy",
    "Pure",
    "Fallible",
)
