"""Tests for generator nodes, kinds and the registry."""

import asyncio

import pytest

from deity.exceptions import DeityError, GeneratorNotFoundError
from deity.generators.base import Deferred, Immediate, ValueSource, gather, settle, then
from deity.engine.driver import IterationDriver, run
from deity.generators.kinds import AsyncIteratorSource, GeneratorKind, as_kind
from deity.generators.node import GeneratorNode
from deity.generators.registry import GeneratorRegistry, get_global_generator_registry, kind


class ConstantSource(ValueSource):
    kind_name = "constant"

    def __init__(self, options, value="0"):
        self.value = value

    def next(self):
        return Immediate(self.value)


class TestRegistry:
    """Tests for GeneratorRegistry."""

    def test_seeded_with_builtins(self):
        registry = GeneratorRegistry()
        assert len(registry) == 10
        assert "oneOf" in registry
        assert "missing" not in registry

    def test_empty_registry(self):
        registry = GeneratorRegistry(defaults=False)
        assert len(registry) == 0
        assert registry.get("int") is None

    def test_register(self):
        registry = GeneratorRegistry()
        generator_kind = registry.register("const", ConstantSource)
        assert isinstance(generator_kind, GeneratorKind)
        assert registry.get("const") is generator_kind
        assert generator_kind.name == "const"

    def test_register_overwrites(self):
        registry = GeneratorRegistry()
        registry.register("int", ConstantSource)
        assert GeneratorNode("int:5", registry=registry).resolve() == "5"

    def test_register_all(self):
        registry = GeneratorRegistry(defaults=False)
        registry.register_all({"a": ConstantSource, "b": ConstantSource})
        assert registry.list_kinds() == ["a", "b"]

    def test_register_named_uses_kind_name(self):
        registry = GeneratorRegistry()
        registry.register_named(ConstantSource)
        assert "constant" in registry

    def test_register_named_uses_function_name(self):
        def dice(options, sides="6"):
            while True:
                yield 4

        registry = GeneratorRegistry()
        registry.register_named(dice)
        assert GeneratorNode("dice", registry=registry).resolve() == 4

    def test_global_registry_is_singleton(self):
        assert get_global_generator_registry() is get_global_generator_registry()

    def test_kind_decorator(self):
        @kind("decorated_test_kind")
        def decorated(options):
            while True:
                yield "decorated"

        assert GeneratorNode("decorated_test_kind").resolve() == "decorated"


class TestKinds:
    """Tests for adapting kind implementations."""

    def test_generator_function(self):
        def squares(options):
            n = 0
            while True:
                n += 1
                yield n * n

        node = GeneratorNode("squares", registry=_registry_with(squares=squares))
        assert [node.resolve() for _ in range(3)] == [1, 4, 9]
        assert not node.is_asynchronous

    def test_factory_returning_source(self):
        registry = _registry_with(factory=lambda options, value: ConstantSource(options, value))
        assert GeneratorNode("factory:x", registry=registry).resolve() == "x"

    def test_async_generator_function_is_asynchronous(self):
        async def later(options):
            while True:
                yield 1

        generator_kind = as_kind(later)
        assert generator_kind.asynchronous
        assert generator_kind.name == "later"

    def test_exhausted_generator(self):
        def once(options):
            yield 1

        node = GeneratorNode("once", registry=_registry_with(once=once))
        assert node.resolve() == 1
        with pytest.raises(DeityError):
            node.resolve()

    def test_invalid_factory_result(self):
        registry = _registry_with(bad=lambda options: 42)
        with pytest.raises(DeityError):
            GeneratorNode("bad", registry=registry)

    def test_non_callable_kind(self):
        with pytest.raises(TypeError):
            as_kind("not a kind", name="x")


class TestGeneratorNode:
    """Tests for building and resolving nodes."""

    def test_parses_expression(self):
        node = GeneratorNode("number:1-5")
        assert node.kind == "number"
        assert node.arguments == ("1-5",)
        assert not node.is_asynchronous

    def test_resolve_returns_value(self):
        node = GeneratorNode("number:1-5")
        for _ in range(100):
            assert 1 <= node.resolve() <= 5

    def test_resolve_with_callback(self):
        node = GeneratorNode("int:3-3")
        assert node.resolve(lambda value: value * 2) == 6

    def test_shorthand_expression(self):
        assert GeneratorNode("3*(int:3-3)").resolve() == "333"

    def test_accepts_plain_dict_options(self):
        node = GeneratorNode("entry", {"collection": [1, 2]})
        assert node.resolve() in (1, 2)

    def test_unknown_kind(self):
        with pytest.raises(GeneratorNotFoundError) as exc_info:
            GeneratorNode("unknownKind:1-2")
        assert "unknownKind" in str(exc_info.value)
        assert exc_info.value.kind == "unknownKind"

    def test_unknown_nested_kind(self):
        with pytest.raises(GeneratorNotFoundError):
            GeneratorNode("array:(int:1-2):(nope)")

    def test_nested_nodes_share_registry(self, registry):
        node = GeneratorNode("array:(delayed:3):(int:1-1)", registry=registry)
        assert node.is_asynchronous

    def test_sync_errors_propagate(self):
        def broken(options):
            while True:
                raise ValueError("broken draw")
                yield

        node = GeneratorNode("broken", registry=_registry_with(broken=broken))
        with pytest.raises(ValueError, match="broken draw"):
            node.resolve()


class TestValues:
    """Tests for the Immediate/Deferred combinators."""

    def test_then_immediate(self):
        assert then(Immediate(2), lambda v: v + 1) == Immediate(3)

    def test_gather_immediate(self):
        assert gather([Immediate(1), Immediate(2)]) == Immediate([1, 2])

    @pytest.mark.asyncio
    async def test_then_deferred(self):
        async def two():
            return 2

        value = then(Deferred(two()), lambda v: v + 1)
        assert isinstance(value, Deferred)
        assert await value == 3

    @pytest.mark.asyncio
    async def test_gather_mixed(self):
        async def two():
            await asyncio.sleep(0)
            return 2

        value = gather([Immediate(1), Deferred(two())])
        assert isinstance(value, Deferred)
        assert await settle(value) == [1, 2]


class TestAsyncNodes:
    """Tests for asynchronous resolution and composition."""

    @pytest.mark.asyncio
    async def test_async_node(self, registry):
        node = GeneratorNode("delayed:9", registry=registry)
        assert node.is_asynchronous

        deferred = node.resolve()
        assert isinstance(deferred, Deferred)
        assert await deferred == 9

    @pytest.mark.asyncio
    async def test_async_callback(self, registry):
        node = GeneratorNode("delayed:9", registry=registry)
        assert await node.resolve(lambda value: value + 1) == 10

    @pytest.mark.asyncio
    async def test_array_of_sync_and_async(self, registry):
        node = GeneratorNode("array:(int:5-5):(delayed:9)", registry=registry)
        assert node.is_asynchronous
        assert await node.resolve() == [5, 9]

    @pytest.mark.asyncio
    async def test_array_keeps_argument_order(self, registry):
        node = GeneratorNode("array:(delayed:1:0.05):(delayed:2:0)", registry=registry)
        assert await node.resolve() == [1, 2]

    @pytest.mark.asyncio
    async def test_repeat_async_in_issue_order(self, registry):
        node = GeneratorNode("repeat:3:(counter)", registry=registry)
        assert await node.resolve() == "123"
        assert await node.resolve() == "456"

    @pytest.mark.asyncio
    async def test_string_of_async(self, registry):
        node = GeneratorNode("string:(delayed:42)", registry=registry)
        assert await node.resolve() == "42"

    @pytest.mark.asyncio
    async def test_one_of_async_children(self, registry):
        node = GeneratorNode("oneOf:(delayed:1):(delayed:2)", registry=registry)
        assert node.is_asynchronous
        assert await node.resolve() in (1, 2)

    @pytest.mark.asyncio
    async def test_async_errors_reject(self, registry):
        node = GeneratorNode("array:(int:1-1):(failing)", registry=registry)
        with pytest.raises(RuntimeError, match="draw failed"):
            await node.resolve()


def _registry_with(**kinds):
    registry = GeneratorRegistry()
    registry.register_all(kinds)
    return registry


class SlowSource(ValueSource):
    """Sync class whose draws settle later; only its registration says so."""

    def __init__(self, options, value="1"):
        self.value = int(value)

    def next(self):
        return Deferred(self._later())

    async def _later(self):
        await asyncio.sleep(0)
        return self.value


class TestDeclaredCapability:
    """Tests for asynchronicity declared at registration."""

    def test_registration_marks_node_asynchronous(self):
        registry = GeneratorRegistry()
        registry.register("slow", SlowSource, asynchronous=True)

        node = GeneratorNode("slow:4", registry=registry)
        assert node.is_asynchronous
        assert GeneratorNode("array:(slow:4):(int:1-1)", registry=registry).is_asynchronous

    def test_driver_settles_declared_async_kind(self):
        registry = GeneratorRegistry()
        registry.register("slow", SlowSource, asynchronous=True)

        pending = run("slow:4", {"iterations": 2}, lambda value: value, registry=registry)
        assert asyncio.run(pending) == [4, 4]


class TestScheduledCallbacks:
    """Tests for callbacks attached to asynchronous draws."""

    @pytest.mark.asyncio
    async def test_callback_runs_without_awaiting(self, registry):
        calls = []
        node = GeneratorNode("delayed:9", registry=registry)

        node.resolve(calls.append)
        await asyncio.sleep(0.05)

        assert calls == [9]

    def test_callback_outside_loop_stays_lazy(self, registry):
        node = GeneratorNode("delayed:9:0", registry=registry)
        deferred = node.resolve(lambda value: value * 2)

        assert isinstance(deferred, Deferred)
        assert asyncio.run(settle(deferred)) == 18


class TestEventLoops:
    """Tests for async generator kinds used from several event loops."""

    def test_async_node_survives_new_loop(self, registry):
        node = GeneratorNode("repeat:3:(counter)", registry=registry)

        assert asyncio.run(settle(node.resolve_value())) == "123"
        assert asyncio.run(settle(node.resolve_value())) == "123"

    def test_driver_reused_across_loops(self, registry):
        node_values = []
        driver = IterationDriver(["counter"], node_values.append, {"iterations": 2}, registry=registry)

        asyncio.run(driver.run())
        asyncio.run(driver.run())

        assert len(node_values) == 4

    def test_source_without_restart_is_loop_bound(self):
        async def values():
            while True:
                yield 1

        source = AsyncIteratorSource(values(), "ones")
        assert asyncio.run(settle(source.next())) == 1
        with pytest.raises(DeityError, match="another event loop"):
            asyncio.run(settle(source.next()))
