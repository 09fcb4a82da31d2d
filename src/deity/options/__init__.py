"""Options module - run configuration shared by generators."""

from deity.options.base import Options, DEFAULT_ITERATIONS, DEFAULT_LETTERS
from deity.options.loader import OptionsLoader, load_options

__all__ = [
    "Options",
    "DEFAULT_ITERATIONS",
    "DEFAULT_LETTERS",
    "OptionsLoader",
    "load_options",
]
