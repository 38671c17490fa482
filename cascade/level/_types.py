"""
Level types.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Protocol

# ═══════════════════════════════════════════════════════════════════════════════
# Level Protocol — Users Implement This
# ═══════════════════════════════════════════════════════════════════════════════


class Level[K, T](Protocol):
    """
    Cache level protocol.

    Only get/set are required. A level may additionally expose, and the
    coordinator picks them up structurally:

        name: str                         — used in logs and faults
        on_get_error(error) -> None       — read failure hook
        on_set_error(error) -> None       — write failure hook
        async delete(key, options) -> bool
        on_delete_error(error) -> None    — delete failure hook

    Example:
        class RedisLevel[T]:
            name = "redis"

            def __init__(self, client: Redis) -> None:
                self.client = client

            async def get(self, key: str, options: object) -> T | None:
                data = await self.client.get(key)
                return pickle.loads(data) if data else None

            async def set(self, key: str, value: T, options: object) -> None:
                await self.client.set(key, pickle.dumps(value))

            def on_get_error(self, error: Exception) -> None:
                metrics.incr("redis.read_error")
    """

    async def get(self, key: K, options: Any) -> T | None:
        """Get value. Returns None (or any non-value) on miss."""
        ...

    async def set(self, key: K, value: T, options: Any) -> None:
        """Store value."""
        ...


type ErrorHook = Callable[[Exception], None]


# ═══════════════════════════════════════════════════════════════════════════════
# Level Faults — Isolated Failures
# ═══════════════════════════════════════════════════════════════════════════════


class LevelErrorKind(Enum):
    """Which level call failed."""

    READ = auto()
    WRITE = auto()
    DELETE = auto()


@dataclass(frozen=True, slots=True)
class LevelFault:
    """
    A level failure that was isolated from the main flow.

    Note: error is the original exception, never wrapped.
    """

    kind: LevelErrorKind
    index: int
    level: str
    error: Exception


_HOOKS = {
    LevelErrorKind.READ: "on_get_error",
    LevelErrorKind.WRITE: "on_set_error",
    LevelErrorKind.DELETE: "on_delete_error",
}


def level_name(level: object, index: int) -> str:
    """Level's own name if it has one, positional name otherwise."""
    name = getattr(level, "name", None)
    return name if isinstance(name, str) else f"level-{index}"


def report(level: object, index: int, kind: LevelErrorKind, error: Exception) -> LevelFault:
    """Pass error to the level's hook for kind (if any) and build the fault."""
    hook: ErrorHook | None = getattr(level, _HOOKS[kind], None)
    if hook is not None:
        hook(error)
    return LevelFault(kind=kind, index=index, level=level_name(level, index), error=error)


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "Level",
    "ErrorHook",
    "LevelErrorKind",
    "LevelFault",
    "level_name",
    "report",
)
