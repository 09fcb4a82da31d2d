"""Shared fixtures: a registry with a few asynchronous kinds."""

import asyncio

import pytest

from deity.generators.registry import GeneratorRegistry


async def delayed(options, value="1", delay="0.01"):
    """Yields `value` as an int after sleeping `delay` seconds."""
    while True:
        await asyncio.sleep(float(delay))
        yield int(value)


async def counter(options):
    """Yields 1, 2, 3, ... with a suspension before each value."""
    n = 0
    while True:
        await asyncio.sleep(0)
        n += 1
        yield n


async def failing(options):
    """Suspends once, then fails."""
    await asyncio.sleep(0)
    raise RuntimeError("draw failed")
    yield


@pytest.fixture
def registry():
    """A fresh registry with the builtins and some async kinds."""
    registry = GeneratorRegistry()
    registry.register("delayed", delayed)
    registry.register("counter", counter)
    registry.register("failing", failing)
    return registry
