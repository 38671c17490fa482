"""
Cascade — read through L1 → L2 → origin, hydrate on the way back.

Key concepts:
- Level = storage backend (anything with async get/set)
- Coordinator = ordered levels + compute + policy
- Full miss writes farthest first; a hit at L2 hydrates L1 only
"""

from kungfu import Ok, Error
from cascade import coordinator as C
from cascade import level as V
from cascade import lift as L
from cascade.log import configure_logging
from examples._infra import banner, run, UserId, User, FakeDb, FlakyLevel


db = FakeDb()


# ═══════════════════════════════════════════════════════════════════════════════
# 1. LEVELS — nearest first
# ═══════════════════════════════════════════════════════════════════════════════

l1: V.MemoryLevel[str, User] = V.MemoryLevel(name="L1-memory")
l2 = FlakyLevel(name="L2-redis")


# ═══════════════════════════════════════════════════════════════════════════════
# 2. COMPUTE — plain coroutine lifted into a Result
# ═══════════════════════════════════════════════════════════════════════════════


async def load_user(uid: UserId, options: object) -> User:
    print(f"  [ORIGIN] Fetching user {uid.value} from DB...")
    return await db.get_user(uid)


# ═══════════════════════════════════════════════════════════════════════════════
# 3. COORDINATOR
# ═══════════════════════════════════════════════════════════════════════════════

users = (
    C.cache(L.computing(load_user), key=lambda uid: f"user:{uid.value}")
    .level(l1)
    .level(l2)
    .build()
)


def show(label: str, result) -> None:
    match result:
        case Ok(r):
            source = "origin" if r.computed else f"L{r.index + 1}"
            print(f"   {label}: source={source} written={r.written} → {r.value.name}")
        case Error(e):
            print(f"   {label}: error: {e}")


async def main() -> None:
    configure_logging("WARNING")
    banner("Cascade: L1 / L2 / origin")
    uid = UserId(1)

    print("\n1. Cold read (miss L1 → miss L2 → origin, write L2 then L1):")
    show("r1", await users.resolve(uid))

    print("\n2. Warm read (hit L1, nothing written):")
    show("r2", await users.resolve(uid))

    print("\n3. Drop L1 entry (hit L2, hydrate L1):")
    await l1.delete(f"user:{uid.value}")
    show("r3", await users.resolve(uid))

    print("\n4. L2 down, L1 cleared (read error isolated, origin still answers):")
    await l1.clear()
    l2.down = True
    show("r4", await users.resolve(uid))
    l2.down = False

    print("\n5. Unknown user (compute error reaches the caller):")
    show("r5", await users.resolve(UserId(99)))

    print(f"\nOrigin reads: {db.reads}")


if __name__ == "__main__":
    run(main)
