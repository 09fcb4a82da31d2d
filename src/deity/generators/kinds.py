"""Generator kinds: named factories of value sources.

A kind is called with the run options and the argument strings of an
expression and returns a fresh ValueSource. Kinds can be written as

- a ValueSource subclass (the builtins work this way),
- a generator function yielding values forever,
- an async generator function, which makes the kind asynchronous,
- any function returning a ValueSource or an iterator.

Whether a kind is asynchronous is decided from its declaration, never by
drawing a value.
"""

import asyncio
import inspect
import logging
from typing import Any, AsyncIterator, Callable, Iterator

from deity.exceptions import DeityError
from deity.generators.base import Deferred, Value, ValueSource, wrap

logger = logging.getLogger(__name__)


class IteratorSource(ValueSource):
    """Adapts a plain iterator into a value source.

    Yielded awaitables become Deferred values, so a generator function marked
    asynchronous may yield coroutines.
    """

    def __init__(self, iterator: Iterator[Any], name: str, asynchronous: bool = False):
        self._iterator = iterator
        self._name = name
        self.asynchronous = asynchronous

    def next(self) -> Value:
        try:
            return wrap(next(self._iterator))
        except StopIteration:
            raise DeityError(f"Generator kind '{self._name}' stopped producing values") from None


class AsyncIteratorSource(ValueSource):
    """Adapts an async iterator into a value source.

    Steps are serialised, so draws issued together settle in issue order.

    An async generator belongs to the event loop that first steps it, and
    `asyncio.run` closes it when that loop shuts down. When the source is
    drawn from on another loop, the iterator is recreated with `restart` and
    its state starts over. Without `restart` this raises DeityError.
    """

    asynchronous = True

    def __init__(
        self,
        iterator: AsyncIterator[Any],
        name: str,
        restart: Callable[[], AsyncIterator[Any]] | None = None,
    ):
        self._iterator = iterator
        self._name = name
        self._restart = restart
        self._loop: asyncio.AbstractEventLoop | None = None
        self._lock: asyncio.Lock | None = None

    def next(self) -> Value:
        return Deferred(self._step())

    def _bind(self, loop: asyncio.AbstractEventLoop) -> None:
        if loop is self._loop:
            return

        if self._loop is not None:
            if self._restart is None:
                raise DeityError(f"Generator kind '{self._name}' is bound to another event loop")
            logger.debug(f"Restarting generator kind '{self._name}' on a new event loop")
            self._iterator = self._restart()

        self._loop = loop
        self._lock = asyncio.Lock()

    async def _step(self) -> Any:
        self._bind(asyncio.get_running_loop())
        async with self._lock:
            try:
                return await self._iterator.__anext__()
            except StopAsyncIteration:
                raise DeityError(f"Generator kind '{self._name}' stopped producing values") from None


class GeneratorKind:
    """A named, callable factory of value sources."""

    def __init__(
        self,
        name: str,
        factory: Callable[..., Any],
        asynchronous: bool | None = None,
    ):
        self.name = name
        self.factory = factory

        if asynchronous is None:
            asynchronous = bool(getattr(factory, "asynchronous", False)) or inspect.isasyncgenfunction(factory)
        self.asynchronous = asynchronous

    def __call__(self, options: Any, *arguments: str) -> ValueSource:
        """Create a value source for one expression."""
        result = self.factory(options, *arguments)

        if isinstance(result, ValueSource):
            return result
        if hasattr(result, "__anext__"):
            return AsyncIteratorSource(result, self.name, restart=lambda: self.factory(options, *arguments))
        if hasattr(result, "__next__"):
            return IteratorSource(result, self.name, asynchronous=self.asynchronous)

        raise DeityError(
            f"Generator kind '{self.name}' returned {type(result).__name__}, "
            "expected a ValueSource or an iterator"
        )

    def __repr__(self) -> str:
        mode = "async" if self.asynchronous else "sync"
        return f"GeneratorKind({self.name!r}, {mode})"


def kind_name_of(impl: Any) -> str | None:
    """Name a kind implementation declares for itself, if any."""
    return getattr(impl, "kind_name", None) or getattr(impl, "__name__", None)


def as_kind(impl: Any, name: str | None = None, asynchronous: bool | None = None) -> GeneratorKind:
    """Adapt a kind implementation into a GeneratorKind.

    Args:
        impl: A GeneratorKind, ValueSource subclass or factory function
        name: Kind name, defaults to the implementation's own name
        asynchronous: Override the declared capability

    Returns:
        The adapted GeneratorKind
    """
    if isinstance(impl, GeneratorKind):
        if name is None and asynchronous is None:
            return impl
        return GeneratorKind(name or impl.name, impl.factory, impl.asynchronous if asynchronous is None else asynchronous)

    if not callable(impl):
        raise TypeError(f"Generator kind must be callable, got {type(impl).__name__}")

    name = name or kind_name_of(impl)
    if not name:
        raise TypeError(f"Cannot derive a kind name from {impl!r}")

    return GeneratorKind(name, impl, asynchronous)
