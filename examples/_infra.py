"""Shared infrastructure for examples."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field


# Types
@dataclass(frozen=True, slots=True)
class UserId:
    value: int


@dataclass(frozen=True, slots=True)
class User:
    id: UserId
    name: str
    email: str


# Errors
@dataclass(frozen=True, slots=True)
class NotFound(Exception):
    entity: str
    id: int | str

    def __str__(self) -> str:
        return f"{self.entity}:{self.id} not found"


# Fake DB
@dataclass(slots=True)
class FakeDb:
    users: dict[int, User] = field(default_factory=lambda: {
        1: User(UserId(1), "Alice", "alice@example.com"),
        2: User(UserId(2), "Bob", "bob@example.com"),
    })
    reads: int = 0

    async def get_user(self, user_id: UserId) -> User:
        await asyncio.sleep(0.01)
        self.reads += 1
        user = self.users.get(user_id.value)
        if user is None:
            raise NotFound("User", user_id.value)
        return user


# Flaky level — fails every call while `down` is set
@dataclass(slots=True)
class FlakyLevel:
    name: str
    down: bool = False
    data: dict[str, User] = field(default_factory=dict)

    async def get(self, key: str, options: object) -> User | None:
        if self.down:
            raise ConnectionError(f"{self.name} unreachable")
        return self.data.get(key)

    async def set(self, key: str, value: User, options: object) -> None:
        if self.down:
            raise ConnectionError(f"{self.name} unreachable")
        self.data[key] = value

    def on_get_error(self, error: Exception) -> None:
        print(f"  [{self.name}] read failed: {error}")

    def on_set_error(self, error: Exception) -> None:
        print(f"  [{self.name}] write failed: {error}")


# Helpers
def banner(title: str) -> None:
    print(f"\n{'─' * 50}\n{title}\n{'─' * 50}")


def run(main: Callable[[], Coroutine[object, object, None]]) -> None:
    asyncio.run(main())
