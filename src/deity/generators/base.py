"""Base classes for value sources and the values they produce.

A value source yields one value per `next()` call. Synchronous sources wrap
each value in `Immediate`; asynchronous sources return a `Deferred` holding an
awaitable that settles to the value later on the event loop. The combinators
below work on either case, so composite generators never need to know whether
their children are synchronous.
"""

import asyncio
import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generator, Iterable


@dataclass(frozen=True)
class Immediate:
    """A value that is available now."""

    value: Any


@dataclass(frozen=True)
class Deferred:
    """A value that becomes available once its awaitable settles.

    Deferred values are awaitable themselves. Like the coroutine they usually
    wrap, each one can be awaited only once.
    """

    awaitable: Awaitable[Any]

    def __await__(self) -> Generator[Any, None, Any]:
        return self.awaitable.__await__()


Value = Immediate | Deferred


def wrap(value: Any) -> Value:
    """Wrap a raw result: awaitables become Deferred, anything else Immediate."""
    if isinstance(value, (Immediate, Deferred)):
        return value
    if inspect.isawaitable(value):
        return Deferred(value)
    return Immediate(value)


async def settle(value: Value) -> Any:
    """Wait for a value and return its concrete content."""
    if isinstance(value, Deferred):
        return await value.awaitable
    return value.value


def then(value: Value, fn: Callable[[Any], Any]) -> Value:
    """Apply a transform to a value once it is available.

    Immediate values are transformed right away. For deferred values the
    transform runs after the awaitable settles; if it returns an awaitable,
    that is awaited as well.
    """
    if isinstance(value, Immediate):
        return wrap(fn(value.value))

    async def chained() -> Any:
        result = fn(await value.awaitable)
        if inspect.isawaitable(result):
            result = await result
        return result

    return Deferred(chained())


def gather(values: Iterable[Value]) -> Value:
    """Combine values into a list, in input order.

    The result is immediate when every value is immediate. Otherwise it is a
    deferred list that settles once every value has settled; a failure of any
    value fails the whole list.
    """
    values = list(values)
    if all(isinstance(v, Immediate) for v in values):
        return Immediate([v.value for v in values])

    async def gathered() -> list[Any]:
        return list(await asyncio.gather(*(settle(v) for v in values)))

    return Deferred(gathered())


class ValueSource(ABC):
    """Stateful, infinite producer of values for one generator node.

    Subclasses are instantiated with the run options followed by the
    expression's argument strings. `asynchronous` tells whether `next()` may
    return Deferred values; it is known without drawing anything.
    """

    kind_name: str | None = None
    asynchronous: bool = False

    @property
    def is_asynchronous(self) -> bool:
        return self.asynchronous

    @abstractmethod
    def next(self) -> Value:
        """Advance the source by one step and return the produced value."""
        pass
