"""Options shared by every generator built for one run.

Options carry the run configuration (iteration count, alphabet, seed) plus any
custom values a generator kind reads, such as the collection used by `entry`.
"""

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from deity.utils.range import Range

DEFAULT_ITERATIONS = 100
DEFAULT_LETTERS = "A-Z"

# Two single characters, e.g. "a-f" or "0-9"
CHARACTER_RANGE_PATTERN = re.compile(r"[^-]-[^-]")


class Options(BaseModel):
    """Configuration for a generation run.

    Unknown fields are kept as custom options and can be read with `get()`
    or attribute access.
    """

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    iterations: int = Field(
        default=DEFAULT_ITERATIONS,
        ge=1,
        description="Number of times the callback is invoked",
    )
    letters: Range | str = Field(
        default_factory=lambda: Range(DEFAULT_LETTERS),
        description="Alphabet used by the string kind, a Range or a string of characters",
    )
    seed: int | None = Field(
        default=None,
        description="Seed for the shared random number generator",
    )

    _registry: Any = PrivateAttr(default=None)

    @field_validator("letters", mode="before")
    @classmethod
    def _letters_as_range(cls, value: Any) -> Any:
        if isinstance(value, str) and CHARACTER_RANGE_PATTERN.fullmatch(value):
            return Range(value, char=True)
        return value

    def get(self, name: str, default: Any = None) -> Any:
        """Read a standard or custom option."""
        if name in type(self).model_fields:
            return getattr(self, name)
        return (self.model_extra or {}).get(name, default)

    @property
    def registry(self) -> Any:
        """Generator registry nested expressions are looked up in, if bound."""
        return self._registry

    def with_registry(self, registry: Any) -> "Options":
        """Copy of these options bound to a generator registry."""
        bound = self.model_copy()
        bound._registry = registry
        return bound

    def custom(self) -> dict[str, Any]:
        """Custom options, i.e. those that are not standard fields."""
        return dict(self.model_extra or {})

    @classmethod
    def coerce(cls, value: "Options | dict[str, Any] | None") -> "Options":
        """Turn None or a plain mapping into Options."""
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        return cls(**value)
