"""Expressions module - the generator DSL parser."""

from deity.expressions.parser import ExpressionParser, ParsedInvocation, parse

__all__ = [
    "ExpressionParser",
    "ParsedInvocation",
    "parse",
]
