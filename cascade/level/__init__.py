"""
Level — one cache tier behind the coordinator.

    from cascade import level as V

    l1 = V.MemoryLevel(name="L1")
    l2 = V.level_from(get=redis_get, set=redis_set, name="L2")
"""

from __future__ import annotations

from cascade.level._types import (
    Level,
    ErrorHook,
    LevelErrorKind,
    LevelFault,
)
from cascade.level._functional import FunctionalLevel, level_from
from cascade.level._memory import MemoryLevel

__all__ = (
    "Level",
    "ErrorHook",
    "LevelErrorKind",
    "LevelFault",
    "FunctionalLevel",
    "level_from",
    "MemoryLevel",
)
