"""Generator Registry for managing available generator kinds."""

import logging
import threading
from typing import Any, Callable, Iterator, Mapping

from deity.generators.kinds import GeneratorKind, as_kind

logger = logging.getLogger(__name__)


class GeneratorRegistry:
    """Registry of generator kinds by name.

    A new registry is seeded with the builtin kinds. Kinds can be added or
    replaced at any time but never removed. Registration is guarded by a lock;
    registering while values are being resolved is not supported.
    """

    def __init__(self, defaults: bool = True):
        self._kinds: dict[str, GeneratorKind] = {}
        self._lock = threading.RLock()
        if defaults:
            self._register_defaults()

    def _register_defaults(self) -> None:
        """Register the builtin kinds."""
        from deity.generators.core import BUILTIN_KINDS

        self.register_all(BUILTIN_KINDS)

    def register(self, name: str, kind: Any, asynchronous: bool | None = None) -> GeneratorKind:
        """Register a kind under a name, replacing any existing one.

        Args:
            name: The kind name used in expressions
            kind: A ValueSource subclass, factory or (async) generator function
            asynchronous: Override the kind's declared capability

        Returns:
            The registered GeneratorKind
        """
        generator_kind = as_kind(kind, name=name, asynchronous=asynchronous)
        with self._lock:
            if name in self._kinds:
                logger.debug(f"Replacing generator kind '{name}'")
            self._kinds[name] = generator_kind
        return generator_kind

    def register_all(self, kinds: Mapping[str, Any]) -> None:
        """Register several kinds from a name to implementation mapping."""
        with self._lock:
            for name, kind in kinds.items():
                self.register(name, kind)

    def register_named(self, kind: Any, asynchronous: bool | None = None) -> GeneratorKind:
        """Register a kind under its own name (`kind_name` or `__name__`)."""
        generator_kind = as_kind(kind, asynchronous=asynchronous)
        return self.register(generator_kind.name, generator_kind)

    def get(self, name: str) -> GeneratorKind | None:
        """Get a kind by name.

        Args:
            name: The kind name

        Returns:
            The kind or None if not registered
        """
        return self._kinds.get(name)

    def list_kinds(self) -> list[str]:
        """List all registered kind names."""
        return list(self._kinds.keys())

    def __contains__(self, name: str) -> bool:
        """Check if a kind name is registered."""
        return name in self._kinds

    def __len__(self) -> int:
        return len(self._kinds)

    def __iter__(self) -> Iterator[GeneratorKind]:
        return iter(list(self._kinds.values()))


_global_registry: GeneratorRegistry | None = None
_global_lock = threading.Lock()


def get_global_generator_registry() -> GeneratorRegistry:
    """Get the global generator registry singleton."""
    global _global_registry
    with _global_lock:
        if _global_registry is None:
            _global_registry = GeneratorRegistry()
    return _global_registry


def kind(name: str | None = None, asynchronous: bool | None = None) -> Callable[[Any], Any]:
    """Decorator to register a kind in the global registry.

    Usage:
        @kind("dice")
        def dice(options, sides="6"):
            while True:
                yield get_rng().randint(1, int(sides))
    """
    def decorator(impl: Any) -> Any:
        registry = get_global_generator_registry()
        if name is None:
            registry.register_named(impl, asynchronous=asynchronous)
        else:
            registry.register(name, impl, asynchronous=asynchronous)
        return impl
    return decorator
