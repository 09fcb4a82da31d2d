"""Generators module - generator kinds, their registry and nodes.

A generator node binds a parsed expression to a live value source created by
a registered kind. The builtin kinds are:
- string, number, int, char, boolean
- oneOf, array, repeat (composites of nested expressions)
- literal, entry
"""

from deity.generators.base import (
    Immediate,
    Deferred,
    Value,
    ValueSource,
    wrap,
    settle,
    then,
    gather,
)
from deity.generators.kinds import GeneratorKind, as_kind
from deity.generators.registry import GeneratorRegistry, get_global_generator_registry, kind
from deity.generators.node import GeneratorNode
from deity.generators.core import BUILTIN_KINDS

__all__ = [
    "Immediate",
    "Deferred",
    "Value",
    "ValueSource",
    "wrap",
    "settle",
    "then",
    "gather",
    "GeneratorKind",
    "as_kind",
    "GeneratorRegistry",
    "get_global_generator_registry",
    "kind",
    "GeneratorNode",
    "BUILTIN_KINDS",
]
