"""Exceptions raised by deity.

Construction-time errors (unknown kinds, missing collections, bad literal
JSON, malformed expressions) surface before any value is drawn. Errors raised
while drawing values, including those raised by user callbacks, are never
caught by deity and reach the caller unchanged.
"""

from __future__ import annotations


class DeityError(Exception):
    """Base exception for all deity errors."""

    pass


class GeneratorNotFoundError(DeityError):
    """A generator expression names a kind that is not registered."""

    def __init__(self, kind: str, available: list[str] | None = None):
        self.kind = kind
        self.available = available or []

        message = f'Generator "{kind}" not found'
        if self.available:
            message += f"\nAvailable: {', '.join(sorted(self.available))}"
        super().__init__(message)


class CollectionNotFoundError(DeityError):
    """The `entry` kind could not find its collection in the options."""

    def __init__(self, prop: str):
        self.prop = prop
        message = (
            f"Collection '{prop}' not found in options.\n"
            f"Pass it as a custom option, e.g. {{'{prop}': [1, 2, 3]}}"
        )
        super().__init__(message)


class ParseError(DeityError):
    """Malformed JSON text handed to the `literal` kind."""

    def __init__(self, text: str, reason: str | None = None):
        self.text = text
        self.reason = reason

        message = f"Could not parse literal value {text!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ArgumentError(DeityError):
    """Invalid arguments at the driver boundary."""

    pass


class MalformedExpressionError(DeityError):
    """A generator expression is not structurally valid."""

    def __init__(self, expression: str, reason: str):
        self.expression = expression
        self.reason = reason
        super().__init__(f"Malformed expression {expression!r}: {reason}")


class InvalidRangeError(DeityError, ValueError):
    """A range string is not of the form `lo-hi`."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Invalid range {text!r}, expected the form 'lo-hi' (e.g. '1-10' or 'A-Z')")
