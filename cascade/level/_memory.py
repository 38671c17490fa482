"""
Memory level — dict-backed, for tests and examples.
"""

from __future__ import annotations

import asyncio
from typing import Any


class MemoryLevel[K, T]:
    """
    In-memory cache level.

    Note: No eviction, no TTL — entries live until deleted or cleared.

    Example:
        l1 = MemoryLevel[str, User](name="L1-memory")
    """

    def __init__(self, name: str = "memory", data: dict[K, T] | None = None) -> None:
        self._name = name
        self._data: dict[K, T] = dict(data) if data else {}
        self._lock = asyncio.Lock()

    @property
    def name(self) -> str:
        return self._name

    async def get(self, key: K, options: Any = None) -> T | None:
        async with self._lock:
            return self._data.get(key)

    async def set(self, key: K, value: T, options: Any = None) -> None:
        async with self._lock:
            self._data[key] = value

    async def delete(self, key: K, options: Any = None) -> bool:
        async with self._lock:
            if key in self._data:
                del self._data[key]
                return True
            return False

    async def clear(self) -> None:
        async with self._lock:
            self._data.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


__all__ = ("MemoryLevel",)
