"""Utility helper functions."""

import logging
import random
from collections.abc import Mapping, Sequence
from typing import Any

logger = logging.getLogger(__name__)

# Every draw in deity goes through this instance.
_rng = random.Random()


def get_rng() -> random.Random:
    """Return the shared random number generator."""
    return _rng


def seed(value: int | None) -> None:
    """Reseed the shared random number generator.

    Args:
        value: Seed value, or None to reseed from system entropy
    """
    logger.debug(f"Seeding shared RNG with {value!r}")
    _rng.seed(value)


def is_numeric(value: Any) -> bool:
    """Check whether a value is a number or a numeric string.

    Booleans, sequences and None are not numeric.
    """
    if value is None or isinstance(value, (bool, list, tuple, dict)):
        return False

    try:
        float(value)
    except (TypeError, ValueError):
        return False
    return True


def random_element_of(collection: Any) -> Any:
    """Get a random element from a collection.

    Ranges draw a random value, sequences (including strings) a random item,
    and mappings the value of a random key.

    Args:
        collection: A Range, sequence or mapping

    Returns:
        The selected element
    """
    get_random = getattr(collection, "get_random", None)
    if callable(get_random):
        return get_random()

    if isinstance(collection, Mapping):
        key = _rng.choice(list(collection.keys()))
        return collection[key]

    if isinstance(collection, Sequence) and len(collection):
        return collection[_rng.randrange(len(collection))]

    raise ValueError(f"Cannot pick a random element of {collection!r}")


def to_text(value: Any) -> str:
    """Textual form of a drawn value, used when joining draws into strings."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries.

    Values in override take precedence over base.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if (
            key in result
            and isinstance(result[key], dict)
            and isinstance(value, dict)
        ):
            result[key] = merge_dicts(result[key], value)
        else:
            result[key] = value

    return result
