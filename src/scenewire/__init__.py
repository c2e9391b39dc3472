"""Scenewire dependency injection for scene components.

Scenewire wires a set of live components in one synchronous pass. Providers
manufacture singleton instances through tagged factory methods; injectables
declare the types they need through tagged fields and methods. The container
registers every provided instance by its declared return type, then fills
every injection point from that registry, failing on the first wiring defect.

Key Features:
    - Tag-based declarations using decorators and ``typing.Annotated``
    - Exactly one instance per type, checked at registration
    - Fields injected before methods, so methods can use them
    - Atomic per-instance injection by default
    - No lazy resolution, scopes or proxies

Basic Usage:
    >>> from typing import Annotated
    >>> from scenewire import Container, Inject, Scene, provide, provider
    >>>
    >>> @provider
    ... class EnvProvider:
    ...     @provide
    ...     def provide_environment(self) -> EnvironmentSystem:
    ...         return EnvironmentSystem()
    >>>
    >>> class Consumer:
    ...     environment_system: Annotated[EnvironmentSystem, Inject]
    >>>
    >>> scene = Scene([EnvProvider(), Consumer()])
    >>> Container(scene).initialize()

The package consists of:
    - markers: tags for fields, methods and provider types
    - introspection: per-type tables of tagged members
    - registry: the type to instance mapping
    - discovery: the live scene and provider/injectable classification
    - providers: provider registration
    - injection: field and method injection
    - lifecycle: the container state machine
    - host: optional process-wide container
    - config, logging, errors: settings, logger names and exceptions
"""

from scenewire.config import WiringConfig, load_config
from scenewire.discovery import Discovery, Scene, discover
from scenewire.errors import (
    DependencyError,
    DuplicateProviderError,
    LifecycleError,
    MarkerConflictError,
    MissingDependencyError,
    ProviderReturnedNothingError,
    ProviderSignatureError,
    RegistryFrozenError,
)
from scenewire.injection import Injector
from scenewire.lifecycle import Container, LifecycleState
from scenewire.markers import DependencyProvider, Inject, inject, provide, provider
from scenewire.providers import register_providers
from scenewire.registry import RegistryEntry, TypeRegistry

__all__ = [
    "Container",
    "DependencyError",
    "DependencyProvider",
    "Discovery",
    "DuplicateProviderError",
    "Inject",
    "Injector",
    "LifecycleError",
    "LifecycleState",
    "MarkerConflictError",
    "MissingDependencyError",
    "ProviderReturnedNothingError",
    "ProviderSignatureError",
    "RegistryEntry",
    "RegistryFrozenError",
    "Scene",
    "TypeRegistry",
    "WiringConfig",
    "discover",
    "inject",
    "load_config",
    "provide",
    "provider",
    "register_providers",
]
