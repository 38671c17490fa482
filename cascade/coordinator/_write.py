"""
Write-back — sequential, isolated per level.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import structlog

from cascade.level import Level, LevelErrorKind, LevelFault
from cascade.level._types import level_name, report
from cascade.coordinator._types import CacheValue

log = structlog.get_logger(__name__)


def targets(count: int, found: CacheValue[Any], hydrate: bool) -> list[int]:
    """
    Level indices to write, in write order.

    computed  → every level, farthest first
    hit at i  → levels 0..i-1, nearest first (empty if hydrate is off)
    """
    if found.index is None:
        return list(reversed(range(count)))
    if not hydrate:
        return []
    return list(range(found.index))


async def write[K, T](
    levels: Sequence[Level[K, T]],
    indices: Sequence[int],
    key: K,
    value: T,
    options: Any,
    faults: list[LevelFault],
) -> tuple[int, ...]:
    """Write value to levels[i] for i in indices. Returns the indices that succeeded."""
    written: list[int] = []
    for index in indices:
        lvl = levels[index]
        try:
            await lvl.set(key, value, options)
        except Exception as e:
            faults.append(report(lvl, index, LevelErrorKind.WRITE, e))
            log.warning(
                "level_write_failed",
                key=key,
                index=index,
                level=level_name(lvl, index),
                error=repr(e),
            )
            continue
        written.append(index)
    return tuple(written)


async def delete[K, T](
    levels: Sequence[Level[K, T]],
    key: K,
    options: Any,
    faults: list[LevelFault],
) -> bool:
    """Delete key from every level that supports it, farthest first."""
    deleted = False
    for index in reversed(range(len(levels))):
        lvl = levels[index]
        delete_fn = getattr(lvl, "delete", None)
        if delete_fn is None:
            continue
        try:
            if await delete_fn(key, options):
                deleted = True
        except Exception as e:
            faults.append(report(lvl, index, LevelErrorKind.DELETE, e))
            log.warning(
                "level_delete_failed",
                key=key,
                index=index,
                level=level_name(lvl, index),
                error=repr(e),
            )
    return deleted


__all__ = ("targets", "write", "delete")
