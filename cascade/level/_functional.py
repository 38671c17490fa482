"""
Function-based level builder.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from cascade.level._types import ErrorHook

type GetFn[K, T] = Callable[[K, Any], Awaitable[T | None]]
type SetFn[K, T] = Callable[[K, T, Any], Awaitable[None]]
type DeleteFn[K] = Callable[[K, Any], Awaitable[bool]]


@dataclass(frozen=True, slots=True)
class FunctionalLevel[K, T]:
    """
    Level built from functions.

    Example:
        level = level_from(
            get=redis_get,
            set=redis_set,
            on_get_error=lambda e: print(f"redis read failed: {e}"),
            name="redis",
        )
    """

    _get: GetFn[K, T]
    _set: SetFn[K, T]
    _delete: DeleteFn[K] | None = None
    on_get_error: ErrorHook | None = None
    on_set_error: ErrorHook | None = None
    on_delete_error: ErrorHook | None = None
    name: str | None = None

    async def get(self, key: K, options: Any) -> T | None:
        return await self._get(key, options)

    async def set(self, key: K, value: T, options: Any) -> None:
        await self._set(key, value, options)

    async def delete(self, key: K, options: Any) -> bool:
        if self._delete is None:
            return False
        return await self._delete(key, options)


def level_from[K, T](
    get: GetFn[K, T],
    set: SetFn[K, T],
    *,
    delete: DeleteFn[K] | None = None,
    on_get_error: ErrorHook | None = None,
    on_set_error: ErrorHook | None = None,
    on_delete_error: ErrorHook | None = None,
    name: str | None = None,
) -> FunctionalLevel[K, T]:
    """
    Create Level from functions.

    Example:
        level = level_from(
            get=lambda key, opts: repo.load(key),
            set=lambda key, value, opts: repo.save(key, value),
        )
    """
    return FunctionalLevel(
        _get=get,
        _set=set,
        _delete=delete,
        on_get_error=on_get_error,
        on_set_error=on_set_error,
        on_delete_error=on_delete_error,
        name=name,
    )


__all__ = ("FunctionalLevel", "level_from")
