"""The container that runs discovery, provider registration and injection once.

:meth:`Container.initialize` walks a fixed state machine::

    IDLE -> DISCOVERING -> REGISTERING_PROVIDERS -> INJECTING_DEPENDENCIES -> READY

Any state after IDLE can move to FAILED. The first error moves the container
to FAILED and is re-raised unchanged. Whatever was registered or injected
before the error stays as it is.
"""

import logging
from enum import Enum
from typing import Any, Optional

from scenewire.config import WiringConfig
from scenewire.discovery import Scene, discover
from scenewire.errors import LifecycleError, MissingDependencyError
from scenewire.injection import Injector
from scenewire.logging import LIFECYCLE_LOGGER_NAME
from scenewire.providers import register_providers
from scenewire.registry import TypeRegistry

__all__ = ["LifecycleState", "Container"]

_LOG = logging.getLogger(LIFECYCLE_LOGGER_NAME)


class LifecycleState(Enum):
    IDLE = "idle"
    DISCOVERING = "discovering"
    REGISTERING_PROVIDERS = "registering_providers"
    INJECTING_DEPENDENCIES = "injecting_dependencies"
    READY = "ready"
    FAILED = "failed"


class Container:
    """Owns the registry and wires a :class:`Scene` in a single pass.

    Components added to the scene after :meth:`initialize` are not wired.
    The container does not guard against a second :meth:`initialize`; use
    :func:`scenewire.host.startup` for a process-wide single call.
    """

    def __init__(self, scene: Scene, config: Optional[WiringConfig] = None):
        self.scene = scene
        self.config = config or WiringConfig()
        self.registry = TypeRegistry()
        self.state = LifecycleState.IDLE
        self.error: Optional[BaseException] = None

    def initialize(self) -> LifecycleState:
        """Discover, register providers and inject, synchronously.

        Returns:
            :attr:`LifecycleState.READY`.

        Raises:
            DependencyError: The first wiring error. :attr:`state` is then
                :attr:`LifecycleState.FAILED` and :attr:`error` holds it.
        """
        include_private = self.config.include_private
        try:
            self._enter(LifecycleState.DISCOVERING)
            discovery = discover(self.scene.instances(), include_private)

            self._enter(LifecycleState.REGISTERING_PROVIDERS)
            register_providers(discovery.providers, self.registry, include_private)
            self.registry.freeze()

            self._enter(LifecycleState.INJECTING_DEPENDENCIES)
            injector = Injector(self.registry, self.config)
            for injectable in discovery.injectables:
                injector.inject(injectable)
        except Exception as e:
            failed_in = self.state
            self.error = e
            self._enter(LifecycleState.FAILED)
            _LOG.error("initialization failed while %s: %s", failed_in.value, e)
            raise

        self._enter(LifecycleState.READY)
        _LOG.info(
            "container ready with %d registered types and %d wired components",
            len(self.registry),
            len(discovery.injectables),
        )
        return self.state

    def resolve(self, provided_type: type) -> Any:
        """Return the registered instance for ``provided_type``.

        Raises:
            LifecycleError: If the container is not ready.
            MissingDependencyError: If nothing is registered for the type.
        """
        if self.state is not LifecycleState.READY:
            raise LifecycleError(
                f"Cannot resolve before the container is ready (state: {self.state.value})"
            )
        if provided_type not in self.registry:
            raise MissingDependencyError(Container, "resolve", provided_type)
        return self.registry.resolve(provided_type)

    @property
    def ready(self) -> bool:
        return self.state is LifecycleState.READY

    def _enter(self, state: LifecycleState) -> None:
        _LOG.debug("%s -> %s", self.state.value, state.value)
        self.state = state
