"""Exceptions raised while wiring a scene."""

from typing import Any, Optional

__all__ = [
    "DependencyError",
    "DuplicateProviderError",
    "ProviderReturnedNothingError",
    "MissingDependencyError",
    "MarkerConflictError",
    "ProviderSignatureError",
    "RegistryFrozenError",
    "LifecycleError",
]


def type_name(target: Any) -> str:
    return getattr(target, "__qualname__", None) or str(target)


class DependencyError(Exception):
    """Raised when a component's dependency cannot be resolved or is misannotated."""

    pass


class DuplicateProviderError(DependencyError):
    """Two provide methods declared the same return type."""

    def __init__(self, provided_type: type, existing_source: str, source: str):
        self.provided_type = provided_type
        self.existing_source = existing_source
        self.source = source
        super().__init__(
            f"Duplicate provider for type {type_name(provided_type)}: "
            f"{source} conflicts with {existing_source}"
        )


class ProviderReturnedNothingError(DependencyError):
    """A provide method returned None."""

    def __init__(self, provider_type: type, method_name: str, return_type: type):
        self.provider_type = provider_type
        self.method_name = method_name
        self.return_type = return_type
        super().__init__(
            f"Provider {type_name(provider_type)}.{method_name} "
            f"returned None for {type_name(return_type)}"
        )


class MissingDependencyError(DependencyError):
    """No registry entry exists for a type some member requires."""

    def __init__(self, owner_type: type, member_name: str, required_type: type):
        self.owner_type = owner_type
        self.member_name = member_name
        self.required_type = required_type
        super().__init__(
            f"Missing dependency {type_name(required_type)} "
            f"for {type_name(owner_type)}.{member_name}"
        )


class MarkerConflictError(DependencyError):
    """A method was tagged with both @inject and @provide."""

    def __init__(self, member_name: str):
        self.member_name = member_name
        super().__init__(
            f"Method {member_name} cannot be tagged with both @inject and @provide"
        )


class ProviderSignatureError(DependencyError):
    """A provide method takes arguments or declares no usable return type."""

    def __init__(self, provider_type: type, method_name: str, reason: str):
        self.provider_type = provider_type
        self.method_name = method_name
        super().__init__(
            f"Provide method {type_name(provider_type)}.{method_name} {reason}"
        )


class RegistryFrozenError(DependencyError):
    """The registry was written to after provider registration finished."""

    def __init__(self, provided_type: Optional[type] = None):
        self.provided_type = provided_type
        super().__init__(
            f"Registry is frozen; cannot register {type_name(provided_type)}"
        )


class LifecycleError(DependencyError):
    """The container was used out of order."""

    pass
