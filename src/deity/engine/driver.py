"""Iteration Driver - calls a function repeatedly with generated values.

The driver builds one generator node per expression, all sharing one set of
options, and invokes a callback `options.iterations` times with one drawn
value per expression. When every node is synchronous the run is synchronous
and returns the callback results directly. When any node (or the callback
itself) is asynchronous, `run()` returns a coroutine to be awaited.
"""

import asyncio
import inspect
import logging
from typing import Any, Callable, Coroutine, Mapping, Sequence

from deity.exceptions import ArgumentError
from deity.generators.base import gather, settle
from deity.generators.node import GeneratorNode
from deity.generators.registry import GeneratorRegistry, get_global_generator_registry
from deity.options.base import Options
from deity.utils.helpers import merge_dicts, seed

logger = logging.getLogger(__name__)


class IterationDriver:
    """Drives a set of generator nodes for a number of iterations.

    Args:
        expressions: Generator expressions, one value per expression per call
        callback: Function called with the drawn values, in expression order
        options: Options shared by every node
        registry: Registry to look kinds up in

    Raises:
        ArgumentError: If no expressions or no callback are given
    """

    def __init__(
        self,
        expressions: Sequence[str],
        callback: Callable[..., Any] | None,
        options: Options | Mapping[str, Any] | None = None,
        registry: GeneratorRegistry | None = None,
    ):
        if not expressions:
            raise ArgumentError("At least one generator expression is required")
        if not callable(callback):
            raise ArgumentError("A callback function is required")

        self.options = Options.coerce(dict(options) if isinstance(options, Mapping) else options)
        self.callback = callback

        if self.options.seed is not None:
            seed(self.options.seed)

        self.nodes = [GeneratorNode(expression, self.options, registry) for expression in expressions]

    @property
    def iterations(self) -> int:
        return self.options.iterations

    @property
    def is_asynchronous(self) -> bool:
        """Whether the run needs an event loop."""
        return inspect.iscoroutinefunction(self.callback) or any(
            node.is_asynchronous for node in self.nodes
        )

    def run(self) -> list[Any] | Coroutine[Any, Any, list[Any]]:
        """Run every iteration.

        Returns:
            The callback results in iteration order, or, for asynchronous runs,
            a coroutine resolving to them
        """
        logger.debug(
            f"Running {self.iterations} iterations of {[n.expression for n in self.nodes]} "
            f"({'async' if self.is_asynchronous else 'sync'})"
        )

        if self.is_asynchronous:
            return self._run_async()

        return [self._iterate() for _ in range(self.iterations)]

    def _iterate(self) -> Any:
        values = [node.resolve() for node in self.nodes]
        return self.callback(*values)

    async def _run_async(self) -> list[Any]:
        tasks = [asyncio.ensure_future(self._iterate_async()) for _ in range(self.iterations)]
        return list(await asyncio.gather(*tasks))

    async def _iterate_async(self) -> Any:
        values = await settle(gather(node.resolve_value() for node in self.nodes))
        result = self.callback(*values)
        if inspect.isawaitable(result):
            result = await result
        return result


def run(*args: Any, registry: GeneratorRegistry | None = None) -> list[Any] | Coroutine[Any, Any, list[Any]]:
    """Call a function a number of times with generated values.

    Arguments are recognised by type: strings are generator expressions,
    mappings or Options are merged into the options, and a callable is the
    callback.

        run("int:1-10", "char:A-F", {"iterations": 20}, check)

    Returns:
        The callback results, or a coroutine resolving to them when any
        generator or the callback is asynchronous

    Raises:
        ArgumentError: If no expressions or no callback are given
    """
    expressions: list[str] = []
    overrides: dict[str, Any] = {}
    callback = None

    for arg in args:
        if isinstance(arg, str):
            expressions.append(arg)
        elif isinstance(arg, Options):
            overrides = merge_dicts(overrides, arg.model_dump(exclude_unset=True))
        elif isinstance(arg, Mapping):
            overrides = merge_dicts(overrides, dict(arg))
        elif callable(arg):
            callback = arg
        else:
            raise ArgumentError(f"Unexpected argument of type {type(arg).__name__}")

    driver = IterationDriver(expressions, callback, Options(**overrides), registry)
    return driver.run()


def extend(key: Any, fn: Any = None, registry: GeneratorRegistry | None = None) -> None:
    """Add one or more generator kinds.

    Accepts a name and an implementation, a single implementation that
    carries its own name, or a mapping of names to implementations.
    """
    if registry is None:
        registry = get_global_generator_registry()

    if isinstance(key, Mapping):
        registry.register_all(key)
    elif fn is None:
        registry.register_named(key)
    else:
        registry.register(key, fn)
