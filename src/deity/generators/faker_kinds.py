"""Generator kinds backed by Faker.

`fake:<provider>` draws from any Faker provider method, e.g. `fake:name`,
`fake:email` or `fake:city`, with an optional locale: `fake:name:fr_FR`.
Each source gets its own Faker instance seeded from the shared RNG, so seeded
runs stay reproducible.
"""


from faker import Faker

from deity.exceptions import ArgumentError
from deity.generators.base import Immediate, Value, ValueSource
from deity.generators.registry import GeneratorRegistry, get_global_generator_registry
from deity.options.base import Options
from deity.utils.helpers import get_rng


class FakeSource(ValueSource):
    """Values from a Faker provider method."""

    kind_name = "fake"

    def __init__(self, options: Options, provider: str = "name", locale: str | None = None):
        self._faker = Faker(locale) if locale else Faker()
        self._faker.seed_instance(get_rng().randrange(2**31))

        method = None if provider.startswith("_") else getattr(self._faker, provider, None)
        if not callable(method):
            raise ArgumentError(f"Unknown Faker provider '{provider}'")
        self._provider = method

    def next(self) -> Value:
        return Immediate(self._provider())


def register_faker_kinds(registry: GeneratorRegistry | None = None) -> None:
    """Register the Faker-backed kinds, in the global registry by default."""
    if registry is None:
        registry = get_global_generator_registry()
    registry.register_named(FakeSource)
