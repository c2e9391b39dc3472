"""Fill tagged fields and call tagged methods from the registry.

Fields of an instance are always assigned before any of its tagged methods
run, so a method may read fields injected in the same pass.

With atomic injection (the default) every field and every method argument is
resolved up front; a missing dependency raises before the instance is touched.
Otherwise fields are assigned as they resolve, and a failure leaves the
earlier ones set.
"""

import logging
from typing import Any, Optional

from scenewire.config import WiringConfig
from scenewire.errors import MissingDependencyError, type_name
from scenewire.introspection import Dependency, InjectionPlan, injection_plan
from scenewire.logging import INJECTION_LOGGER_NAME
from scenewire.registry import TypeRegistry

__all__ = ["Injector"]

_LOG = logging.getLogger(INJECTION_LOGGER_NAME)


class Injector:
    """Wire instances from a populated :class:`TypeRegistry`."""

    def __init__(self, registry: TypeRegistry, config: Optional[WiringConfig] = None):
        self._registry = registry
        self._config = config or WiringConfig()

    def inject(self, instance: Any) -> None:
        """Inject every tagged field and method of ``instance``.

        Raises:
            MissingDependencyError: If a field type or method parameter type
                has no registry entry. A method with a missing argument is
                never called.
        """
        plan = injection_plan(type(instance), self._config.include_private)
        if not plan:
            return

        if self._config.atomic_injection:
            fields = self._resolve_fields(plan)
            calls = [
                (method.name, self._resolve_arguments(plan, method.name, method.dependencies))
                for method in plan.methods
            ]
            for name, value in fields:
                setattr(instance, name, value)
            for name, arguments in calls:
                _call(instance, name, arguments)
        else:
            for field in plan.fields:
                setattr(instance, field.name, self._lookup(plan, field.name, field.declared_type))
            for method in plan.methods:
                _call(instance, method.name, self._resolve_arguments(plan, method.name, method.dependencies))

        _LOG.debug(
            "injected %d fields and %d methods into %s",
            len(plan.fields),
            len(plan.methods),
            type_name(plan.owner_type),
        )

    def _lookup(self, plan: InjectionPlan, member_name: str, required_type: type) -> Any:
        if required_type not in self._registry:
            raise MissingDependencyError(plan.owner_type, member_name, required_type)
        return self._registry.resolve(required_type)

    def _resolve_fields(self, plan: InjectionPlan) -> list[tuple[str, Any]]:
        return [
            (field.name, self._lookup(plan, field.name, field.declared_type))
            for field in plan.fields
        ]

    def _resolve_arguments(
        self, plan: InjectionPlan, method_name: str, dependencies: tuple[Dependency, ...]
    ) -> list[tuple[Dependency, Any]]:
        return [
            (dependency, self._lookup(plan, method_name, dependency.declared_type))
            for dependency in dependencies
        ]


def _call(instance: Any, method_name: str, arguments: list[tuple[Dependency, Any]]) -> None:
    args = [value for dependency, value in arguments if not dependency.keyword_only]
    kwargs = {
        dependency.parameter_name: value
        for dependency, value in arguments
        if dependency.keyword_only
    }
    getattr(instance, method_name)(*args, **kwargs)
