"""
Coordinator builder — fluent API + executor.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Never

import structlog
from kungfu import LazyCoroResult, Result, Ok, Error

from cascade._types import Fallible, Pure
from cascade.level import Level, LevelFault
from cascade.coordinator._types import (
    CacheValue,
    Resolution,
    Invalidation,
    Policy,
    IsValueFn,
    ShouldWriteFn,
    is_present,
    always_write,
)
from cascade.coordinator._read import read
from cascade.coordinator._write import targets, write, delete

log = structlog.get_logger(__name__)

# ═══════════════════════════════════════════════════════════════════════════════
# Key / Compute Function Types
# ═══════════════════════════════════════════════════════════════════════════════

type KeyFn[Q, K] = Callable[[Q], K]
type ComputeFn[Q, T, E] = Callable[[Q, Any], Fallible[T, E]]


def identity[Q](query: Q) -> Q:
    return query


def absent(query: Any, options: Any) -> Pure[None]:
    """Default compute: always Ok(None)."""

    async def _run() -> Result[None, Never]:
        return Ok(None)

    return LazyCoroResult(_run)


# ═══════════════════════════════════════════════════════════════════════════════
# Coordinator — Executor
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(slots=True, frozen=True)
class Coordinator[Q, K, T, E]:
    """
    Compiled multi-level cache.

    Holds configuration only; every call keeps its own state,
    so one instance serves concurrent callers.

    READ:  levels[0] → levels[1] → … → compute()
    WRITE: hit at i  → levels[0..i-1], nearest first
           computed  → all levels, farthest first
    """

    key_fn: KeyFn[Q, K]
    levels: tuple[Level[K, T], ...]
    compute: ComputeFn[Q, T, E]
    policy: Policy = Policy()

    def get(self, query: Q, options: Any = None) -> Fallible[T, E]:
        """
        Get value for query.

        Tries levels in order, then falls back to compute.
        Level failures never surface here; only compute's Error does.
        """
        return self.resolve(query, options).map(lambda r: r.value)

    def resolve(self, query: Q, options: Any = None) -> Fallible[Resolution[T], E]:
        """get(), but returns the value with its source, writes and faults."""

        async def execute() -> Result[Resolution[T], E]:
            key = self.key_fn(query)
            faults: list[LevelFault] = []
            found = await read(self.levels, key, options, self.policy.is_value, faults)
            if found.hit:
                return Ok(await self._write_back(key, found, options, faults))
            return await self._store(query, key, options, faults)

        return LazyCoroResult(execute)

    def set(self, query: Q, options: Any = None) -> Fallible[T, E]:
        """Compute value and write it to all levels, farthest first."""
        return self.store(query, options).map(lambda r: r.value)

    def store(self, query: Q, options: Any = None) -> Fallible[Resolution[T], E]:
        """set(), but returns the full Resolution."""

        async def execute() -> Result[Resolution[T], E]:
            return await self._store(query, self.key_fn(query), options, [])

        return LazyCoroResult(execute)

    def put(self, query: Q, value: T, options: Any = None) -> Pure[T]:
        """Write a known value to all levels, farthest first. Never computes."""

        async def execute() -> Result[T, Never]:
            key = self.key_fn(query)
            stored = await self._write_back(key, CacheValue(value, None), options, [])
            return Ok(stored.value)

        return LazyCoroResult(execute)

    def invalidate(self, query: Q, options: Any = None) -> Pure[Invalidation]:
        """Delete query's key from every level that supports delete."""

        async def execute() -> Result[Invalidation, Never]:
            faults: list[LevelFault] = []
            deleted = await delete(self.levels, self.key_fn(query), options, faults)
            return Ok(Invalidation(deleted=deleted, faults=tuple(faults)))

        return LazyCoroResult(execute)

    async def _store(
        self,
        query: Q,
        key: K,
        options: Any,
        faults: list[LevelFault],
    ) -> Result[Resolution[T], E]:
        result = await self.compute(query, options)
        match result:
            case Ok(value):
                return Ok(await self._write_back(key, CacheValue(value, None), options, faults))
            case Error(e):
                log.info("compute_failed", key=key)
                return Error(e)

    async def _write_back(
        self,
        key: K,
        found: CacheValue[T],
        options: Any,
        faults: list[LevelFault],
    ) -> Resolution[T]:
        indices = targets(len(self.levels), found, self.policy.hydrate)
        written: tuple[int, ...] = ()
        if indices and self.policy.should_write(found):
            written = await write(self.levels, indices, key, found.value, options, faults)
        return Resolution(
            value=found.value,
            index=found.index,
            written=written,
            faults=tuple(faults),
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Cache Builder
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(slots=True, frozen=True)
class Cache[Q, K, T, E]:
    """
    Fluent coordinator builder.

    Type parameters:
        Q: Query type
        K: Key type
        T: Value type
        E: Error type from compute

    Example:
        user_cache = (
            C.cache(fetch_user, key=lambda uid: f"user:{uid.value}")
            .level(l1)
            .level(l2)
            .hydrate(False)
            .build()
        )
    """

    _key_fn: KeyFn[Q, K]
    _compute: ComputeFn[Q, T, E]
    _levels: tuple[Level[K, T], ...]
    _policy: Policy

    def level(self, lvl: Level[K, T]) -> Cache[Q, K, T, E]:
        """Add level behind the ones already added."""
        return Cache(
            _key_fn=self._key_fn,
            _compute=self._compute,
            _levels=(*self._levels, lvl),
            _policy=self._policy,
        )

    def policy(self, policy: Policy) -> Cache[Q, K, T, E]:
        """Replace whole policy."""
        return Cache(
            _key_fn=self._key_fn,
            _compute=self._compute,
            _levels=self._levels,
            _policy=policy,
        )

    def hydrate(self, enabled: bool = True) -> Cache[Q, K, T, E]:
        return self.policy(self._policy.with_hydrate(enabled))

    def is_value(self, fn: IsValueFn) -> Cache[Q, K, T, E]:
        return self.policy(self._policy.with_is_value(fn))

    def should_write(self, fn: ShouldWriteFn) -> Cache[Q, K, T, E]:
        return self.policy(self._policy.with_should_write(fn))

    def build(self) -> Coordinator[Q, K, T, E]:
        """Build executable coordinator."""
        return Coordinator(
            key_fn=self._key_fn,
            levels=self._levels,
            compute=self._compute,
            policy=self._policy,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# cache() / coordinator() — Entry Points
# ═══════════════════════════════════════════════════════════════════════════════


def cache[Q, K, T, E](
    compute: ComputeFn[Q, T, E] = absent,
    *,
    key: KeyFn[Q, K] = identity,
) -> Cache[Q, K, T, E]:
    """
    Create coordinator builder with compute and key function.

    Example:
        from cascade import coordinator as C
        from cascade import lift as L

        async def load_user(uid: UserId, options: object) -> User:
            return await db.get_user(uid)

        user_cache = (
            C.cache(L.computing(load_user), key=lambda uid: f"user:{uid.value}")
            .level(V.MemoryLevel(name="L1"))
            .level(redis_level)
            .build()
        )

        result = await user_cache.get(user_id)
    """
    return Cache(
        _key_fn=key,
        _compute=compute,
        _levels=(),
        _policy=Policy(),
    )


def coordinator[Q, K, T, E](
    *,
    caches: Iterable[Level[K, T]] = (),
    compute: ComputeFn[Q, T, E] = absent,
    key_for_query: KeyFn[Q, K] = identity,
    is_value: IsValueFn = is_present,
    should_write: ShouldWriteFn = always_write,
    hydrate: bool = True,
) -> Coordinator[Q, K, T, E]:
    """
    Build coordinator from keyword options in one call.

    Example:
        c = C.coordinator(caches=[l1, l2], compute=fetch, hydrate=False)
    """
    return Coordinator(
        key_fn=key_for_query,
        levels=tuple(caches),
        compute=compute,
        policy=Policy(hydrate=hydrate, is_value=is_value, should_write=should_write),
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "KeyFn",
    "ComputeFn",
    "identity",
    "absent",
    "Coordinator",
    "Cache",
    "cache",
    "coordinator",
)
