"""Builtin generator kinds.

Each kind is a ValueSource subclass built from the run options and the
expression's argument strings, e.g. `int:1-10` builds `IntSource(options, "1-10")`.
Composite kinds (`string` with a nested expression, `oneOf`, `array`,
`repeat`) build their child nodes once and are asynchronous when any child is.
"""

import copy
import json
import math
from typing import Any

from deity.exceptions import ArgumentError, CollectionNotFoundError, ParseError
from deity.expressions.parser import NUMBER_RANGE_PATTERN
from deity.generators.base import Immediate, Value, ValueSource, gather, then
from deity.generators.node import GeneratorNode
from deity.options.base import Options
from deity.utils.helpers import get_rng, is_numeric, random_element_of, to_text
from deity.utils.range import Range


class CompositeSource(ValueSource):
    """A source drawing from child nodes built from nested expressions."""

    def __init__(self, options: Options, expressions: tuple[str, ...]):
        self.children = [GeneratorNode(expression, options) for expression in expressions]

    @property
    def is_asynchronous(self) -> bool:
        return any(child.is_asynchronous for child in self.children)


class StringSource(CompositeSource):
    """Random strings from the configured letters, or the text of a nested draw.

    With a numeric range (`string:5-10`) the length is drawn from the range and
    each character from `options.letters`. Anything else is treated as a
    nested expression whose draws are converted to text (`string:(int:0-10)`).
    """

    kind_name = "string"

    def __init__(self, options: Options, range_text: str = "10-20"):
        self.letters = options.letters

        if NUMBER_RANGE_PATTERN.match(range_text):
            self.length = Range(range_text)
            super().__init__(options, ())
        else:
            self.length = None
            super().__init__(options, (range_text,))

    def next(self) -> Value:
        if self.length is None:
            return then(self.children[0].resolve_value(), to_text)

        length = self.length.get_random_int()
        return Immediate("".join(str(random_element_of(self.letters)) for _ in range(length)))


class NumberSource(ValueSource):
    """Real numbers in a range, optionally rounded.

    A precision below 1 rounds to the matching number of decimal places
    (0.01 gives two), a precision of 1 or more rounds to the nearest multiple
    of the precision, halves rounding up.
    """

    kind_name = "number"

    def __init__(self, options: Options, range_text: str = "0-1", precision: Any = None):
        self.range = Range(range_text)
        self.precision = float(precision) if is_numeric(precision) else None

        if self.precision is not None and self.precision <= 0:
            raise ArgumentError(f"Precision must be positive, got {precision!r}")

    def next(self) -> Value:
        value = self.range.get_random()
        precision = self.precision

        if precision is None:
            return Immediate(value)

        if precision < 1:
            return Immediate(round(value, int(-math.log10(precision))))

        rounded = math.floor(value / precision + 0.5) * precision
        return Immediate(int(rounded) if precision.is_integer() else rounded)


class IntSource(ValueSource):
    """Integers in an inclusive range."""

    kind_name = "int"

    def __init__(self, options: Options, range_text: str = "0-10"):
        self.range = Range(range_text)

    def next(self) -> Value:
        return Immediate(self.range.get_random_int())


class CharSource(ValueSource):
    """Single characters in an inclusive range."""

    kind_name = "char"

    def __init__(self, options: Options, range_text: str = "A-Z"):
        self.range = Range(range_text)

    def next(self) -> Value:
        return Immediate(self.range.get_random())


class BooleanSource(ValueSource):
    """True with probability `bias`."""

    kind_name = "boolean"

    def __init__(self, options: Options, bias: Any = 0.5):
        self.bias = float(bias)

    def next(self) -> Value:
        return Immediate(get_rng().random() < self.bias)


class OneOfSource(CompositeSource):
    """Draws from one randomly picked child per resolution."""

    kind_name = "oneOf"

    def __init__(self, options: Options, *expressions: str):
        if not expressions:
            raise ArgumentError("oneOf needs at least one generator expression")
        super().__init__(options, expressions)

    def next(self) -> Value:
        return get_rng().choice(self.children).resolve_value()


class ArraySource(CompositeSource):
    """Draws every child per resolution, as a list in argument order."""

    kind_name = "array"

    def __init__(self, options: Options, *expressions: str):
        if not expressions:
            raise ArgumentError("array needs at least one generator expression")
        super().__init__(options, expressions)

    def next(self) -> Value:
        return gather(child.resolve_value() for child in self.children)


class RepeatSource(CompositeSource):
    """Joins the text of `n` independent draws of one child."""

    kind_name = "repeat"

    def __init__(self, options: Options, n: Any = None, expression: str | None = None):
        if expression is None or not is_numeric(n):
            raise ArgumentError("repeat needs a count and a generator expression, e.g. repeat:3:(int:0-9)")

        if not float(n).is_integer() or float(n) < 0:
            raise ArgumentError(f"repeat count must be a whole number, got {n!r}")

        self.n = int(float(n))
        super().__init__(options, (expression,))

    def next(self) -> Value:
        child = self.children[0]
        draws = gather(child.resolve_value() for _ in range(self.n))
        return then(draws, lambda values: "".join(to_text(value) for value in values))


class LiteralSource(ValueSource):
    """A fixed value given as JSON text, e.g. `"test"` or `[1, 2, 3]`."""

    kind_name = "literal"

    def __init__(self, options: Options, text: str = "null"):
        try:
            self.value = json.loads(text)
        except json.JSONDecodeError as e:
            raise ParseError(text, str(e)) from e

    def next(self) -> Value:
        return Immediate(copy.deepcopy(self.value))


class EntrySource(ValueSource):
    """A random element of a collection passed in the options.

    Sequences yield a random item, mappings the value of a random key.
    """

    kind_name = "entry"

    def __init__(self, options: Options, prop: str = "collection"):
        self.collection = options.get(prop)
        if not self.collection:
            raise CollectionNotFoundError(prop)

    def next(self) -> Value:
        return Immediate(random_element_of(self.collection))


BUILTIN_KINDS: dict[str, type[ValueSource]] = {
    source.kind_name: source
    for source in (
        StringSource,
        NumberSource,
        IntSource,
        CharSource,
        BooleanSource,
        OneOfSource,
        ArraySource,
        RepeatSource,
        LiteralSource,
        EntrySource,
    )
}
