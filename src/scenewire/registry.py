"""Type registry holding exactly one instance per provided type."""

from dataclasses import dataclass
from typing import Any, Iterator, Optional

from scenewire.errors import DuplicateProviderError, RegistryFrozenError, type_name

__all__ = ["RegistryEntry", "TypeRegistry"]


@dataclass(frozen=True)
class RegistryEntry:
    """A registered instance.

    Attributes:
        provided_type: The exact type the instance is registered under.
        instance: The registered object. The registry holds the owning reference.
        source: Name of the provide method that produced it, as ``Type.method``.
    """

    provided_type: type
    instance: Any
    source: str


class TypeRegistry:
    """Mapping from an exact type to the single instance provided for it.

    Lookups match the type exactly; a subclass instance registered under
    ``Base`` is only found by ``Base``. The registry is written during provider
    registration and then frozen.
    """

    def __init__(self):
        self._entries: dict[type, RegistryEntry] = {}
        self._frozen = False

    def register(self, provided_type: type, instance: Any, source: str = "") -> RegistryEntry:
        """Add an entry.

        Args:
            provided_type: Key for the entry.
            instance: The object to register.
            source: Where the instance came from, used in error messages.

        Returns:
            The new :class:`RegistryEntry`.

        Raises:
            RegistryFrozenError: If the registry has been frozen.
            DuplicateProviderError: If ``provided_type`` is already registered.
                The existing entry is kept.
        """
        if self._frozen:
            raise RegistryFrozenError(provided_type)
        existing = self._entries.get(provided_type)
        if existing is not None:
            raise DuplicateProviderError(provided_type, existing.source, source)

        entry = RegistryEntry(provided_type, instance, source or type_name(provided_type))
        self._entries[provided_type] = entry
        return entry

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def resolve(self, provided_type: type) -> Any:
        """Return the instance registered for ``provided_type``.

        Raises:
            KeyError: If nothing is registered for the type.
        """
        return self._entries[provided_type].instance

    def get(self, provided_type: type, default: Optional[Any] = None) -> Any:
        entry = self._entries.get(provided_type)
        return default if entry is None else entry.instance

    def entry(self, provided_type: type) -> RegistryEntry:
        return self._entries[provided_type]

    def __contains__(self, provided_type: object) -> bool:
        return provided_type in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[type]:
        return iter(self._entries)

    def entries(self) -> list[RegistryEntry]:
        return list(self._entries.values())
