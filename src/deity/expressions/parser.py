"""Parser for generator expressions.

A generator expression names a kind followed by colon-separated arguments:

    int:1-10
    array:(int:1-10):(char:A-F)

Parenthesised arguments are themselves expressions, parsed later by the kind
that consumes them. A few shorthands are recognised before the general form:

    3*(int:1-10)    repeat:3:(int:1-10)
    1-10            number:1-10
    A-F             char:A-F
    "text"          literal:"text"
"""

import re

from pydantic import BaseModel, ConfigDict, Field

from deity.exceptions import MalformedExpressionError

REPETITION_PATTERN = re.compile(r"^(\d+)\*(\(.+\))$")
NUMBER_RANGE_PATTERN = re.compile(r"^-?[\d.]+--?[\d.]+$")
CHAR_RANGE_PATTERN = re.compile(r"^[a-z]-[a-z]$", re.IGNORECASE)
LITERAL_PATTERN = re.compile(r'^".+"$')


class ParsedInvocation(BaseModel):
    """A kind name and its raw argument strings."""

    model_config = ConfigDict(frozen=True)

    kind: str = Field(..., description="Name of the generator kind")
    arguments: tuple[str, ...] = Field(
        default=(),
        description="Argument strings in source order, nested expressions unparsed",
    )


class ExpressionParser:
    """Turns expression strings into ParsedInvocations."""

    def parse(self, expression: str) -> ParsedInvocation:
        """Parse a generator expression.

        Args:
            expression: The expression string

        Returns:
            The parsed kind and arguments

        Raises:
            MalformedExpressionError: On unbalanced parentheses or an empty kind
        """
        match = REPETITION_PATTERN.match(expression)
        if match:
            return self.parse(f"repeat:{match.group(1)}:{match.group(2)}")

        if NUMBER_RANGE_PATTERN.match(expression):
            return ParsedInvocation(kind="number", arguments=(expression,))

        if CHAR_RANGE_PATTERN.match(expression):
            return ParsedInvocation(kind="char", arguments=(expression,))

        if LITERAL_PATTERN.match(expression):
            return ParsedInvocation(kind="literal", arguments=(expression,))

        kind, *arguments = self._split(expression)
        if not kind:
            raise MalformedExpressionError(expression, "missing generator kind")

        return ParsedInvocation(kind=kind, arguments=tuple(arguments))

    def _split(self, expression: str) -> list[str]:
        """Split on colons outside parentheses, dropping the outermost pair."""
        segments = [""]
        depth = 0

        for char in expression:
            if char == "(":
                depth += 1
                if depth == 1:
                    continue
            elif char == ")":
                depth -= 1
                if depth < 0:
                    raise MalformedExpressionError(expression, "unexpected ')'")
                if depth == 0:
                    continue
            elif char == ":" and depth == 0:
                segments.append("")
                continue

            segments[-1] += char

        if depth:
            raise MalformedExpressionError(expression, "unclosed '('")

        return segments


_parser = ExpressionParser()


def parse(expression: str) -> ParsedInvocation:
    """Parse an expression with the shared parser."""
    return _parser.parse(expression)
