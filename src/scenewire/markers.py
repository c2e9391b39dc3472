"""Tags that mark injection points, factory methods and provider types.

Tags carry no payload. They are stored as attributes on the decorated function
or class and read back by :mod:`scenewire.introspection`.

Example:
    >>> @provider
    ... class EnvProvider:
    ...     @provide
    ...     def provide_environment(self) -> EnvironmentSystem:
    ...         return EnvironmentSystem()
    >>>
    >>> class Consumer:
    ...     environment: Annotated[EnvironmentSystem, Inject]
    ...
    ...     @inject
    ...     def init(self, audio: AudioSystem) -> None:
    ...         self.audio = audio
"""

import inspect
from typing import Any, Callable, TypeVar

from scenewire.errors import DependencyError, MarkerConflictError

__all__ = [
    "Inject",
    "inject",
    "provide",
    "provider",
    "DependencyProvider",
    "is_inject_marker",
    "is_inject_method",
    "is_provide_method",
    "is_provider",
]

INJECT_FLAG = "__scenewire_inject__"
PROVIDE_FLAG = "__scenewire_provide__"
PROVIDER_FLAG = "__scenewire_provider__"

F = TypeVar("F", bound=Callable[..., Any])
C = TypeVar("C", bound=type)


class _InjectMarker:
    __slots__ = ()

    def __repr__(self) -> str:
        return "Inject"


Inject = _InjectMarker()
"""Field tag, used as ``Annotated[SomeType, Inject]`` on a class attribute."""


def _set_flag(func: Callable, flag: str, conflicting_flag: str) -> None:
    if not inspect.isfunction(func):
        raise DependencyError(f"{func} is not a function")
    if getattr(func, conflicting_flag, False):
        raise MarkerConflictError(func.__qualname__)
    setattr(func, flag, True)


def inject(func: F) -> F:
    """Tag a method whose parameters are supplied from the registry.

    Every parameter after ``self`` must be annotated with the type to resolve.
    """
    _set_flag(func, INJECT_FLAG, PROVIDE_FLAG)
    return func


def provide(func: F) -> F:
    """Tag a no-argument factory method on a provider type.

    The method's return annotation is the registry key it populates.
    """
    _set_flag(func, PROVIDE_FLAG, INJECT_FLAG)
    return func


def provider(cls: C) -> C:
    """Mark a class as a provider; subclasses inherit the capability."""
    if not inspect.isclass(cls):
        raise DependencyError(f"{cls} is not a class")
    setattr(cls, PROVIDER_FLAG, True)
    return cls


class DependencyProvider:
    """Base class alternative to the :func:`provider` decorator."""

    __scenewire_provider__ = True


def is_provider(cls: type) -> bool:
    return bool(getattr(cls, PROVIDER_FLAG, False))


def is_inject_method(member: Any) -> bool:
    return inspect.isfunction(member) and getattr(member, INJECT_FLAG, False)


def is_provide_method(member: Any) -> bool:
    return inspect.isfunction(member) and getattr(member, PROVIDE_FLAG, False)


def is_inject_marker(metadata: Any) -> bool:
    return metadata is Inject
