"""Live component snapshot and classification into providers and injectables.

Components are pushed into a :class:`Scene` as they are created, rather than
found by scanning the whole process. :func:`discover` then splits a snapshot
of the scene into providers and injectables. Both lists keep scene insertion
order, so registration errors reproduce identically from run to run.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, TypeVar

from scenewire.introspection import injection_plan
from scenewire.logging import DISCOVERY_LOGGER_NAME
from scenewire.markers import is_provider

__all__ = ["Scene", "Discovery", "discover"]

_LOG = logging.getLogger(DISCOVERY_LOGGER_NAME)

T = TypeVar("T")


class Scene:
    """The set of live components the container wires.

    Instances are tracked by identity; adding the same object twice keeps its
    first position.
    """

    def __init__(self, components: Iterable[Any] = ()):
        self._components: dict[int, Any] = {}
        for component in components:
            self.add(component)

    def add(self, component: T) -> T:
        """Add a live component and return it."""
        self._components.setdefault(id(component), component)
        return component

    def spawn(self, factory: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Create a component with ``factory(*args, **kwargs)`` and add it."""
        return self.add(factory(*args, **kwargs))

    def instances(self) -> tuple[Any, ...]:
        """Snapshot of every component currently in the scene, in insertion order."""
        return tuple(self._components.values())

    def __contains__(self, component: object) -> bool:
        return id(component) in self._components

    def __len__(self) -> int:
        return len(self._components)


@dataclass(frozen=True)
class Discovery:
    """Result of classifying a scene snapshot.

    Attributes:
        providers: Components whose type carries the provider capability.
        injectables: Components whose type has at least one tagged field or method.
    """

    providers: tuple[Any, ...]
    injectables: tuple[Any, ...]


def discover(instances: Iterable[Any], include_private: bool = True) -> Discovery:
    """Classify live components.

    A component can be both a provider and an injectable; the two checks are
    independent.

    Args:
        instances: The live components, typically :meth:`Scene.instances`.
        include_private: Whether single-underscore members count as tagged.

    Returns:
        A :class:`Discovery` with both groups in input order.
    """
    instances = tuple(instances)
    providers = tuple(i for i in instances if is_provider(type(i)))
    injectables = tuple(i for i in instances if injection_plan(type(i), include_private))

    _LOG.debug(
        "discovered %d providers and %d injectables among %d components",
        len(providers),
        len(injectables),
        len(instances),
    )
    return Discovery(providers, injectables)
