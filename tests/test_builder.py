"""
Unit tests for construction, levels, lifting, invalidation and log events.
"""

import pytest
import structlog
from structlog.testing import capture_logs
from kungfu import Ok

from cascade import coordinator as C
from cascade import level as V
from cascade import lift as L
from cascade.log import configure_logging
from conftest import Computer, sets, ok, err


@pytest.mark.unit
class TestBuilder:
    def test_builder_is_immutable(self):
        base = C.cache()
        with_level = base.level(V.MemoryLevel())

        assert base.build().levels == ()
        assert len(with_level.build().levels) == 1

    def test_policy_methods_return_new_policy(self):
        policy = C.Policy()
        changed = policy.with_hydrate(False)

        assert policy.hydrate is True
        assert changed.hydrate is False
        assert changed.is_value is policy.is_value
        assert changed.should_write is policy.should_write

    def test_defaults(self):
        built = C.cache().build()

        assert built.policy.hydrate is True
        assert built.policy.is_value(None) is False
        assert built.policy.is_value(0) is True
        assert built.key_fn("q") == "q"

    @pytest.mark.asyncio
    async def test_builder_levels_keep_insertion_order(self, journal, make_levels, compute_ok):
        l1, l2, l3 = make_levels(None, None, None)
        users = C.cache(compute_ok, key=lambda q: f"k:{q}").level(l1).level(l2).level(l3).build()

        ok(await users.get("abc"))

        assert [c[1] for c in journal] == ["l1", "l2", "l3", "l3", "l2", "l1"]
        assert sets(journal)[0][2] == "k:abc"

    @pytest.mark.asyncio
    async def test_builder_hooks_match_factory(self, journal, make_levels, compute_ok):
        c = (
            C.cache(compute_ok)
            .level(make_levels(None)[0])
            .level(make_levels("123")[0])
            .hydrate(False)
            .is_value(lambda v: v is not None)
            .should_write(lambda cv: True)
            .build()
        )

        assert ok(await c.get("abc")) == "123"
        assert sets(journal) == []


@pytest.mark.unit
class TestLevels:
    @pytest.mark.asyncio
    async def test_memory_level_round_trip(self):
        lvl = V.MemoryLevel[str, int](name="L1")

        await lvl.set("a", 1)

        assert await lvl.get("a") == 1
        assert "a" in lvl
        assert await lvl.delete("a") is True
        assert await lvl.delete("a") is False
        assert len(lvl) == 0

    @pytest.mark.asyncio
    async def test_level_from_functions(self):
        store: dict[str, str] = {}
        errors: list[Exception] = []

        async def get(key, options):
            return store.get(key)

        async def put(key, value, options):
            store[key] = value

        lvl = V.level_from(get=get, set=put, on_set_error=errors.append, name="dict")
        c = C.coordinator(caches=[lvl], compute=Computer(Ok("v")))

        ok(await c.get("k"))

        assert store == {"k": "v"}
        assert lvl.name == "dict"
        assert await lvl.delete("k", None) is False

    @pytest.mark.asyncio
    async def test_level_from_error_hooks_receive_errors(self):
        boom = ConnectionError("gone")
        seen: list[Exception] = []

        async def get(key, options):
            raise boom

        async def put(key, value, options):
            raise boom

        lvl = V.level_from(get=get, set=put, on_get_error=seen.append, on_set_error=seen.append)
        c = C.coordinator(caches=[lvl], compute=Computer(Ok("v")))

        resolution = ok(await c.resolve("k"))

        assert resolution.value == "v"
        assert seen == [boom, boom]
        assert [f.level for f in resolution.faults] == ["level-0", "level-0"]


@pytest.mark.unit
class TestInvalidate:
    @pytest.mark.asyncio
    async def test_invalidate_removes_from_all_levels(self):
        near = V.MemoryLevel(name="near", data={"k:1": "a"})
        far = V.MemoryLevel(name="far", data={"k:1": "a"})
        c = C.cache(key=lambda q: f"k:{q}").level(near).level(far).build()

        outcome = ok(await c.invalidate(1))

        assert outcome.deleted is True
        assert len(near) == 0 and len(far) == 0

    @pytest.mark.asyncio
    async def test_invalidate_skips_levels_without_delete(self, make_levels):
        c = C.coordinator(caches=make_levels("x"))

        outcome = ok(await c.invalidate("abc"))

        assert outcome.deleted is False
        assert outcome.faults == ()

    @pytest.mark.asyncio
    async def test_invalidate_isolates_delete_errors(self):
        boom = OSError("locked")
        seen: list[Exception] = []

        async def get(key, options):
            return None

        async def put(key, value, options):
            return None

        async def delete(key, options):
            raise boom

        broken = V.level_from(get=get, set=put, delete=delete, on_delete_error=seen.append)
        healthy = V.MemoryLevel(data={"abc": 1})
        c = C.coordinator(caches=[healthy, broken])

        outcome = ok(await c.invalidate("abc"))

        assert outcome.deleted is True
        assert seen == [boom]
        assert outcome.faults[0].kind is V.LevelErrorKind.DELETE
        assert outcome.faults[0].index == 1


@pytest.mark.unit
class TestLift:
    @pytest.mark.asyncio
    async def test_computing_wraps_plain_coroutine(self, journal, make_levels):
        async def load(query, options):
            return query * 2

        c = C.coordinator(caches=make_levels(None), compute=L.computing(load))

        assert ok(await c.get(21)) == 42
        assert sets(journal) == [("set", "l1", 21, 42)]

    @pytest.mark.asyncio
    async def test_computing_turns_exception_into_error(self, journal, make_levels):
        boom = LookupError("no such user")

        async def load(query, options):
            raise boom

        c = C.coordinator(caches=make_levels(None), compute=L.computing(load))

        assert err(await c.get(1)) is boom
        assert sets(journal) == []

    @pytest.mark.asyncio
    async def test_from_result(self):
        assert ok(await L.from_result(Ok(5))) == 5

    @pytest.mark.asyncio
    async def test_pure_as_compute_fills_levels(self, journal, make_levels):
        c = C.coordinator(caches=make_levels(None, None), compute=lambda q, o: L.pure(f"v:{q}"))

        assert ok(await c.get("abc")) == "v:abc"
        assert [(s[1], s[3]) for s in sets(journal)] == [("l2", "v:abc"), ("l1", "v:abc")]

    @pytest.mark.asyncio
    async def test_fail_as_compute_returns_error_without_writes(self, journal, make_levels):
        boom = LookupError("gone")
        c = C.coordinator(caches=make_levels(None, None), compute=lambda q, o: L.fail(boom))

        assert err(await c.get("abc")) is boom
        assert err(await c.set("abc")) is boom
        assert sets(journal) == []


@pytest.mark.unit
class TestLogEvents:
    @pytest.mark.asyncio
    async def test_isolated_failures_are_logged(self, make_levels, compute_ok):
        levels = make_levels(None, None)
        levels[0].get_error = ConnectionError("down")
        levels[1].set_error = OSError("full")
        c = C.coordinator(caches=levels, compute=compute_ok)

        with capture_logs() as logs:
            ok(await c.get("abc"))

        events = [(e["event"], e.get("index")) for e in logs if e["log_level"] == "warning"]
        assert events == [("level_read_failed", 0), ("level_write_failed", 1)]


@pytest.mark.unit
class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def _reset(self):
        yield
        structlog.reset_defaults()

    def test_console_renderer_by_default(self):
        configure_logging("debug")

        config = structlog.get_config()
        assert structlog.is_configured()
        assert isinstance(config["logger_factory"], structlog.stdlib.LoggerFactory)
        assert isinstance(config["processors"][-1], structlog.dev.ConsoleRenderer)

    def test_json_renderer(self):
        configure_logging("WARNING", json=True)

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
        assert structlog.processors.add_log_level in processors
