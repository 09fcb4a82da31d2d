"""Generator nodes - parsed expressions bound to a live value source."""

import asyncio
import logging
from typing import Any, Callable

from deity.exceptions import GeneratorNotFoundError
from deity.expressions.parser import parse
from deity.generators.base import Deferred, Immediate, Value, ValueSource, then
from deity.generators.registry import GeneratorRegistry, get_global_generator_registry
from deity.options.base import Options

logger = logging.getLogger(__name__)


class GeneratorNode:
    """A generator expression ready to produce values.

    Building a node parses the expression, looks up its kind and creates the
    kind's value source. Each call to `resolve` advances that source by
    exactly one step.

    Args:
        expression: The generator expression, e.g. "int:1-10"
        options: Options shared with nested nodes (plain dicts are accepted)
        registry: Registry to look kinds up in, also used by nested nodes.
            Defaults to the registry bound to the options, then the global one.

    Raises:
        GeneratorNotFoundError: If the expression's kind is not registered
    """

    def __init__(
        self,
        expression: str,
        options: Options | dict[str, Any] | None = None,
        registry: GeneratorRegistry | None = None,
    ):
        self.expression = expression

        options = Options.coerce(options)
        if registry is not None and options.registry is not registry:
            options = options.with_registry(registry)
        self.options = options
        self.registry: GeneratorRegistry = (
            options.registry if options.registry is not None else get_global_generator_registry()
        )

        invocation = parse(expression)
        self.kind = invocation.kind
        self.arguments = invocation.arguments

        generator_kind = self.registry.get(self.kind)
        if generator_kind is None:
            raise GeneratorNotFoundError(self.kind, self.registry.list_kinds())

        self.source: ValueSource = generator_kind(self.options, *self.arguments)
        self.is_asynchronous = generator_kind.asynchronous or self.source.is_asynchronous

        logger.debug(
            f"Built {'async' if self.is_asynchronous else 'sync'} node "
            f"{self.kind}{list(self.arguments)} from {expression!r}"
        )

    def resolve_value(self) -> Value:
        """Draw one value as an Immediate or Deferred."""
        return self.source.next()

    def resolve(self, callback: Callable[[Any], Any] | None = None) -> Any:
        """Draw one value.

        Without a callback, returns the value itself for synchronous nodes or
        an awaitable Deferred for asynchronous ones. With a callback, the
        callback receives the value: immediately when it is available, in
        which case its result is returned, or once the draw settles, in which
        case an awaitable Deferred of the callback's result is returned.

        Inside a running event loop the callback is scheduled as a task, so it
        runs even if the returned Deferred is never awaited.
        """
        value = self.resolve_value()
        if callback is None:
            return value.value if isinstance(value, Immediate) else value

        value = then(value, callback)
        if isinstance(value, Immediate):
            return value.value

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return value
        return Deferred(asyncio.ensure_future(value.awaitable))

    def __repr__(self) -> str:
        return f"GeneratorNode({self.expression!r})"
