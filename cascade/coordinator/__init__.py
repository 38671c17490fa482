"""
Coordinator — cascading multi-level cache.

    from cascade import coordinator as C

    users = C.cache(fetch_user, key=user_key).level(l1).level(l2).build()
    result = await users.get(user_id)
"""

from __future__ import annotations

from cascade.coordinator._types import (
    CacheValue,
    Resolution,
    Invalidation,
    Policy,
    is_present,
    always_write,
)
from cascade.coordinator._builder import (
    Coordinator,
    Cache,
    cache,
    coordinator,
    identity,
    absent,
)

__all__ = (
    "CacheValue",
    "Resolution",
    "Invalidation",
    "Policy",
    "is_present",
    "always_write",
    "Coordinator",
    "Cache",
    "cache",
    "coordinator",
    "identity",
    "absent",
)
