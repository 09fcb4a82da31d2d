#!/usr/bin/env python3
"""
Demo script showing basic usage of deity.

Run this script after installing the package:
    pip install -e .
    python demo.py
"""

import asyncio

import deity
from deity import GeneratorNode, GeneratorRegistry, parse


def demo_parsing():
    """Demonstrate how expressions are parsed."""
    print("=" * 60)
    print("1. PARSING EXPRESSIONS")
    print("=" * 60)

    for expression in ["int:1-10", "3*(char:A-F)", "array:(int:1-5):(boolean:0.2)", "1-100", '"hi"']:
        invocation = parse(expression)
        print(f"{expression:32} -> {invocation.kind} {list(invocation.arguments)}")
    print()


def demo_resolving():
    """Demonstrate drawing values from nodes."""
    print("=" * 60)
    print("2. RESOLVING GENERATORS")
    print("=" * 60)

    deity.seed(42)
    for expression in ["string:5-8", "number:0-100:0.01", "oneOf:(int:1-3):(char:x-z)", "4*(int:0-9)"]:
        node = GeneratorNode(expression)
        values = [node.resolve() for _ in range(3)]
        print(f"{expression:32} -> {values}")

    node = GeneratorNode("entry", {"collection": {"a": "apple", "b": "banana"}})
    print(f"{'entry (mapping)':32} -> {[node.resolve() for _ in range(3)]}")
    print()


def demo_iterations():
    """Demonstrate the iteration driver."""
    print("=" * 60)
    print("3. RUNNING A CALLBACK")
    print("=" * 60)

    def check(a, b):
        assert 1 <= a <= 10
        return f"{a}{b}"

    results = deity.run("int:1-10", "char:A-C", {"iterations": 5}, check)
    print(f"Callback results: {results}")
    print()


def demo_async():
    """Demonstrate asynchronous kinds composing with synchronous ones."""
    print("=" * 60)
    print("4. ASYNCHRONOUS KINDS")
    print("=" * 60)

    async def slow(options, value="1"):
        while True:
            await asyncio.sleep(0.01)
            yield int(value)

    registry = GeneratorRegistry()
    deity.extend("slow", slow, registry=registry)

    node = GeneratorNode("array:(slow:5):(int:1-3)", registry=registry)
    print(f"Node is asynchronous: {node.is_asynchronous}")
    print(f"Resolved: {asyncio.run(_settle(node))}")

    results = asyncio.run(deity.run("3*(slow:7)", {"iterations": 3}, lambda value: value, registry=registry))
    print(f"Driver results: {results}")
    print()


async def _settle(node):
    return await node.resolve()


def main():
    """Run all demos."""
    print()
    print("DEITY DEMO")
    print("=" * 60)
    print()

    demo_parsing()
    demo_resolving()
    demo_iterations()
    demo_async()

    print("=" * 60)
    print("DEMO COMPLETE")
    print("=" * 60)
    print()
    print("To use the CLI, install the package and run:")
    print("  pip install -e .")
    print("  deity --help")
    print()


if __name__ == "__main__":
    main()
