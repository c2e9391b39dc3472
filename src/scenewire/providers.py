"""Invoke provide methods and populate the registry."""

import logging
from typing import Any, Iterable

from scenewire.errors import ProviderReturnedNothingError, type_name
from scenewire.introspection import provide_methods
from scenewire.logging import PROVIDERS_LOGGER_NAME
from scenewire.registry import RegistryEntry, TypeRegistry

__all__ = ["register_provider", "register_providers"]

_LOG = logging.getLogger(PROVIDERS_LOGGER_NAME)


def register_provider(
    provider: Any, registry: TypeRegistry, include_private: bool = True
) -> list[RegistryEntry]:
    """Call every provide method of one provider and register the results.

    Methods run in declaration order. The first failure stops the provider;
    entries registered before it stay in the registry.

    Args:
        provider: A component whose type carries the provider capability.
        registry: The registry to populate.
        include_private: Whether single-underscore provide methods are called.

    Returns:
        The entries added for this provider.

    Raises:
        ProviderSignatureError: If a provide method is malformed.
        ProviderReturnedNothingError: If a provide method returns None.
        DuplicateProviderError: If a provided type is already registered.
    """
    provider_type = type(provider)
    entries = []

    for method in provide_methods(provider_type, include_private):
        instance = getattr(provider, method.name)()
        if instance is None:
            raise ProviderReturnedNothingError(provider_type, method.name, method.provided_type)

        source = f"{type_name(provider_type)}.{method.name}"
        entries.append(registry.register(method.provided_type, instance, source))
        _LOG.debug("registered %s from %s", type_name(method.provided_type), source)

    return entries


def register_providers(
    providers: Iterable[Any], registry: TypeRegistry, include_private: bool = True
) -> None:
    """Register every provider in order, stopping at the first error."""
    for provider in providers:
        register_provider(provider, registry, include_private)
