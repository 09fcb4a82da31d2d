"""
deity - Randomized value generation from compact expressions.

Expressions such as `int:1-10`, `3*(char:A-F)` or `array:(int:1-5):(boolean)`
describe generators; deity parses them, resolves them synchronously or
asynchronously, and can call a function many times with generated values.
"""

__version__ = "0.1.0"

from deity.exceptions import (
    DeityError,
    GeneratorNotFoundError,
    CollectionNotFoundError,
    ParseError,
    ArgumentError,
    MalformedExpressionError,
    InvalidRangeError,
)
from deity.options.base import Options
from deity.utils.range import Range
from deity.utils.helpers import seed
from deity.expressions.parser import ExpressionParser, ParsedInvocation, parse
from deity.generators.base import Immediate, Deferred, ValueSource
from deity.generators.registry import GeneratorRegistry, get_global_generator_registry, kind
from deity.generators.node import GeneratorNode
from deity.engine.driver import IterationDriver, run, extend

__all__ = [
    # Main entry points
    "run",
    "extend",
    "kind",
    "seed",

    # Core
    "GeneratorNode",
    "GeneratorRegistry",
    "get_global_generator_registry",
    "IterationDriver",
    "ExpressionParser",
    "ParsedInvocation",
    "parse",
    "ValueSource",
    "Immediate",
    "Deferred",
    "Options",
    "Range",

    # Errors
    "DeityError",
    "GeneratorNotFoundError",
    "CollectionNotFoundError",
    "ParseError",
    "ArgumentError",
    "MalformedExpressionError",
    "InvalidRangeError",
]
