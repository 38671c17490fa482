"""
Coordinator types — read results, outcomes and policy.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from cascade.level import LevelFault

# ═══════════════════════════════════════════════════════════════════════════════
# Cache Value — Index-Tagged Read Result
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class CacheValue[T]:
    """
    A value together with where it came from.

    index: level that produced the value, None if it was computed
    and is not cached yet. Slices the hydration range.
    """

    value: T
    index: int | None

    @property
    def hit(self) -> bool:
        return self.index is not None

    @property
    def computed(self) -> bool:
        return self.index is None


# ═══════════════════════════════════════════════════════════════════════════════
# Outcomes
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Resolution[T]:
    """
    Outcome of a resolve/store call.

    written: indices of levels written successfully, in write order.
    faults: isolated level failures, in the order they happened.
    """

    value: T
    index: int | None
    written: tuple[int, ...] = ()
    faults: tuple[LevelFault, ...] = ()

    @property
    def hit(self) -> bool:
        return self.index is not None

    @property
    def computed(self) -> bool:
        return self.index is None


@dataclass(frozen=True, slots=True)
class Invalidation:
    """Outcome of invalidate: whether any level held the key."""

    deleted: bool
    faults: tuple[LevelFault, ...] = ()


# ═══════════════════════════════════════════════════════════════════════════════
# Policy — Hit Test, Write Gate, Hydration
# ═══════════════════════════════════════════════════════════════════════════════

type IsValueFn = Callable[[Any], bool]
type ShouldWriteFn = Callable[[CacheValue[Any]], bool]


def is_present(value: object) -> bool:
    """Default hit test: anything but None."""
    return value is not None


def always_write(value: CacheValue[Any]) -> bool:
    return True


@dataclass(frozen=True, slots=True)
class Policy:
    """
    Coordinator policy.

    Example:
        policy = (
            Policy()
            .with_hydrate(False)
            .with_is_value(lambda v: v is not None and v != "")
            .with_should_write(lambda cv: cv.value is not None)
        )

    Note: Immutable — each method returns new Policy.

    is_value decides which reads count as hits (and so whether compute runs).
    should_write sees the tagged value and may veto every write-back for it.
    hydrate only governs the hit case; full-miss writes ignore it.
    """

    hydrate: bool = True
    is_value: IsValueFn = is_present
    should_write: ShouldWriteFn = always_write

    def with_hydrate(self, hydrate: bool) -> Policy:
        """Enable/disable copying hits into nearer levels."""
        return Policy(
            hydrate=hydrate,
            is_value=self.is_value,
            should_write=self.should_write,
        )

    def with_is_value(self, fn: IsValueFn) -> Policy:
        """Set hit test for level reads."""
        return Policy(
            hydrate=self.hydrate,
            is_value=fn,
            should_write=self.should_write,
        )

    def with_should_write(self, fn: ShouldWriteFn) -> Policy:
        """Set write gate for write-back."""
        return Policy(
            hydrate=self.hydrate,
            is_value=self.is_value,
            should_write=fn,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "CacheValue",
    "Resolution",
    "Invalidation",
    "IsValueFn",
    "ShouldWriteFn",
    "is_present",
    "always_write",
    "Policy",
)
