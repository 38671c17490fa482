"""
Lift — helpers for turning plain functions into compute functions.

Re-exports from combinators.lift with cascade-specific additions.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from kungfu import LazyCoroResult, Result

from cascade._types import Fallible

# Re-export from combinators.lift
from combinators.lift import (
    pure,
    fail,
    catching_async,
)


def _unchanged(e: Exception) -> Exception:
    return e


def from_result[T, E](result: Result[T, E]) -> LazyCoroResult[T, E]:
    """Lift a Result into LazyCoroResult."""
    async def _run() -> Result[T, E]:
        return result
    return LazyCoroResult(_run)


def computing[Q, T, E](
    fn: Callable[[Q, Any], Awaitable[T]],
    on_error: Callable[[Exception], E] = _unchanged,
) -> Callable[[Q, Any], Fallible[T, E]]:
    """
    Lift `async def fn(query, options) -> T` into a compute function.

    Exceptions become Error(on_error(e)); by default the exception itself.

    Example:
        async def load_user(uid: UserId, options: object) -> User:
            return await db.get_user(uid)

        users = C.cache(L.computing(load_user)).level(l1).build()
    """

    def compute(query: Q, options: Any) -> Fallible[T, E]:
        return catching_async(lambda: fn(query, options), on_error=on_error)

    return compute


__all__ = (
    # From combinators.lift
    "pure",
    "fail",
    "catching_async",
    # Cascade additions
    "from_result",
    "computing",
)
