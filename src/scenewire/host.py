"""Process-wide container for hosts that want a single global one.

:func:`startup` builds and initializes the container exactly once per process;
the accessors mirror a classic singleton. Code that can pass a
:class:`~scenewire.lifecycle.Container` around explicitly does not need this
module.
"""

import threading
from typing import Optional

from scenewire.config import WiringConfig, load_config
from scenewire.discovery import Scene
from scenewire.errors import LifecycleError
from scenewire.lifecycle import Container

__all__ = ["startup", "has_instance", "try_get_instance", "current", "reset"]

_lock = threading.Lock()
_instance: Optional[Container] = None


def startup(scene: Scene, config: Optional[WiringConfig] = None) -> Container:
    """Create the process container and initialize it.

    The container is published before :meth:`Container.initialize` runs, so a
    failed startup still leaves it reachable through :func:`current` for
    inspecting :attr:`Container.error`.

    Args:
        scene: The live components to wire.
        config: Settings; loaded from the environment when omitted.

    Raises:
        LifecycleError: If startup has already been called in this process.
        DependencyError: Any wiring error raised during initialization.
    """
    global _instance

    with _lock:
        if _instance is not None:
            raise LifecycleError(
                f"Container already started (state: {_instance.state.value})"
            )
        _instance = Container(scene, config or load_config())

    _instance.initialize()
    return _instance


def has_instance() -> bool:
    return _instance is not None


def try_get_instance() -> Optional[Container]:
    return _instance


def current() -> Container:
    if _instance is None:
        raise LifecycleError("Container has not been started")
    return _instance


def reset() -> None:
    """Forget the process container. Intended for tests."""
    global _instance

    with _lock:
        _instance = None
