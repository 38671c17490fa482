"""Shared fixtures: levels that record every call into one journal."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest
from kungfu import LazyCoroResult, Ok, Error, Result

type Call = tuple[str, str, Any, Any]


@dataclass
class RecordingLevel:
    """
    Level that appends (method, name, key, value) to a shared journal.

    get returns `value`; get_error / set_error make the call raise.
    """

    name: str
    journal: list[Call]
    value: Any = None
    get_error: Exception | None = None
    set_error: Exception | None = None
    seen_options: list[Any] = field(default_factory=list)

    async def get(self, key: Any, options: Any) -> Any:
        self.journal.append(("get", self.name, key, self.value))
        self.seen_options.append(options)
        if self.get_error is not None:
            raise self.get_error
        return self.value

    async def set(self, key: Any, value: Any, options: Any) -> None:
        self.journal.append(("set", self.name, key, value))
        self.seen_options.append(options)
        if self.set_error is not None:
            raise self.set_error


@dataclass
class HookedLevel(RecordingLevel):
    """RecordingLevel that also collects errors passed to its hooks."""

    get_errors: list[Exception] = field(default_factory=list)
    set_errors: list[Exception] = field(default_factory=list)

    def on_get_error(self, error: Exception) -> None:
        self.get_errors.append(error)

    def on_set_error(self, error: Exception) -> None:
        self.set_errors.append(error)


class Computer:
    """Compute function that counts calls and returns a fixed Result."""

    def __init__(self, result: Result[Any, Any]) -> None:
        self.result = result
        self.calls: list[tuple[Any, Any]] = []
        self.error: Exception | None = None

    def __call__(self, query: Any, options: Any) -> LazyCoroResult[Any, Any]:
        self.calls.append((query, options))

        async def _run() -> Result[Any, Any]:
            return self.result

        return LazyCoroResult(_run)


def sets(journal: list[Call]) -> list[Call]:
    return [c for c in journal if c[0] == "set"]


def gets(journal: list[Call]) -> list[Call]:
    return [c for c in journal if c[0] == "get"]


@pytest.fixture
def journal() -> list[Call]:
    return []


@pytest.fixture
def make_levels(journal):
    """make_levels(None, None, "123") → levels l1, l2, l3 returning those values."""

    def _make(*values: Any, hooked: bool = False) -> list[RecordingLevel]:
        cls = HookedLevel if hooked else RecordingLevel
        return [cls(f"l{n}", journal, v) for n, v in enumerate(values, start=1)]

    return _make


@pytest.fixture
def compute_ok():
    return Computer(Ok("123"))


@pytest.fixture
def compute_err():
    boom = RuntimeError("origin down")
    computer = Computer(Error(boom))
    computer.error = boom
    return computer


def ok(result: Result[Any, Any]) -> Any:
    match result:
        case Ok(value):
            return value
        case Error(e):
            pytest.fail(f"expected Ok, got Error({e!r})")


def err(result: Result[Any, Any]) -> Any:
    match result:
        case Error(e):
            return e
        case Ok(value):
            pytest.fail(f"expected Error, got Ok({value!r})")
