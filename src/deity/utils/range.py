"""Closed numeric and character intervals with random sampling."""

import math
import re

from deity.exceptions import InvalidRangeError
from deity.utils.helpers import get_rng, is_numeric

RANGE_PATTERN = re.compile(r"(-?[^-]+)-(-?[^-]+)")


def _to_number(text: str) -> int | float:
    number = float(text)
    return int(number) if number.is_integer() and "." not in text else number


class Range:
    """A range of numbers or characters, e.g. "1-10" or "D-T".

    Numeric ranges sample reals or integers between their bounds; character
    ranges sample single characters between the bounds' code points. Both
    ends are inclusive. Pass `char=True` to read digit bounds as characters,
    as in the alphabet "0-9".
    """

    def __init__(self, text: str, char: bool = False):
        match = RANGE_PATTERN.search(str(text))
        if match is None:
            raise InvalidRangeError(text)

        self.text = str(text)
        low, high = match.group(1), match.group(2)

        if not char and is_numeric(low) and is_numeric(high):
            self.type = "number"
            self.min = _to_number(low)
            self.max = _to_number(high)
        else:
            self.type = "char"
            self.min = low
            self.max = high
            self._min_code = ord(low[0])
            self._max_code = ord(high[0])

    def is_in_range(self, value: int | float | str) -> bool:
        """Check whether a number or character lies within the range."""
        return self.min <= value <= self.max

    def get_random(self) -> float | str:
        """Get a random real number or character within the range."""
        rng = get_rng()
        if self.type == "number":
            return rng.uniform(self.min, self.max)

        return chr(rng.randint(self._min_code, self._max_code))

    def get_random_int(self) -> int:
        """Get a random integer within the range."""
        return get_rng().randint(math.floor(self.min), math.floor(self.max))

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"Range({self.text!r})"
