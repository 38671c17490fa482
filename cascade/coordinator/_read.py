"""
Sequential read — first hit wins.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import structlog

from cascade.level import Level, LevelErrorKind, LevelFault
from cascade.level._types import level_name, report
from cascade.coordinator._types import CacheValue, IsValueFn

log = structlog.get_logger(__name__)


async def read[K, T](
    levels: Sequence[Level[K, T]],
    key: K,
    options: Any,
    is_value: IsValueFn,
    faults: list[LevelFault],
) -> CacheValue[T | None]:
    """
    Probe levels nearest-first, stop at the first usable value.

    A failing probe is reported and counts as a miss.
    Returns CacheValue(None, None) when every level missed.
    """
    for index, lvl in enumerate(levels):
        try:
            value = await lvl.get(key, options)
        except Exception as e:
            faults.append(report(lvl, index, LevelErrorKind.READ, e))
            log.warning(
                "level_read_failed",
                key=key,
                index=index,
                level=level_name(lvl, index),
                error=repr(e),
            )
            continue

        if is_value(value):
            log.debug("level_hit", key=key, index=index, level=level_name(lvl, index))
            return CacheValue(value=value, index=index)

    log.debug("cache_miss", key=key, probed=len(levels))
    return CacheValue(value=None, index=None)


__all__ = ("read",)
