"""Utility functions and the range sampler."""

from deity.utils.helpers import (
    get_rng,
    seed,
    is_numeric,
    random_element_of,
    to_text,
    merge_dicts,
)
from deity.utils.range import Range

__all__ = [
    "get_rng",
    "seed",
    "is_numeric",
    "random_element_of",
    "to_text",
    "merge_dicts",
    "Range",
]
