"""Engine module - drives generators over many iterations."""

from deity.engine.driver import IterationDriver, run, extend

__all__ = [
    "IterationDriver",
    "run",
    "extend",
]
