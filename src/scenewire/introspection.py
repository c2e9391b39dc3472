"""Per-type tables of injection points and provide methods.

Tags are read once per class and cached, so discovery and injection work
from an explicit table of ``member -> required type`` rather than
re-inspecting objects. Members declared on base classes are included; a
subclass redefining a member replaces it in place, keeping the position it
had in the base class.
"""

import inspect
import sys
from dataclasses import dataclass
from functools import lru_cache
from types import SimpleNamespace
from typing import Annotated, Any, Callable, get_args, get_origin, get_type_hints

from scenewire.errors import DependencyError, ProviderSignatureError
from scenewire.markers import is_inject_marker, is_inject_method, is_provide_method

__all__ = [
    "Dependency",
    "FieldInjection",
    "MethodInjection",
    "InjectionPlan",
    "ProvideMethod",
    "injection_plan",
    "provide_methods",
]


@dataclass(frozen=True)
class Dependency:
    """A single parameter of an injection method.

    Attributes:
        parameter_name: The parameter name in the method signature.
        declared_type: The type resolved from the registry for this parameter.
        keyword_only: Whether the parameter must be passed by keyword.
    """

    parameter_name: str
    declared_type: type
    keyword_only: bool = False


@dataclass(frozen=True)
class FieldInjection:
    name: str
    declared_type: type


@dataclass(frozen=True)
class MethodInjection:
    name: str
    dependencies: tuple[Dependency, ...]


@dataclass(frozen=True)
class InjectionPlan:
    """Everything the injector needs to wire one type.

    Attributes:
        owner_type: The class the plan was built for.
        fields: Tagged fields in declaration order.
        methods: Tagged methods in declaration order.
    """

    owner_type: type
    fields: tuple[FieldInjection, ...]
    methods: tuple[MethodInjection, ...]

    def __bool__(self) -> bool:
        return bool(self.fields or self.methods)


@dataclass(frozen=True)
class ProvideMethod:
    name: str
    provided_type: type


def _is_scanned(name: str, include_private: bool) -> bool:
    if name.startswith("__") and name.endswith("__"):
        return False
    return include_private or not name.startswith("_")


def _members_in_declaration_order(cls: type) -> dict[str, Any]:
    members: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        members.update(vars(klass))
    return members


def _tagged_members(
    cls: type, include_private: bool, is_tagged: Callable[[Any], bool]
) -> list[tuple[str, Callable]]:
    tagged = []
    for name, member in _members_in_declaration_order(cls).items():
        if not _is_scanned(name, include_private):
            continue
        if isinstance(member, (staticmethod, classmethod)) and is_tagged(member.__func__):
            raise DependencyError(
                "Tagged member <%s.%s> must be a plain instance method, not a %s"
                % (cls.__qualname__, name, type(member).__name__)
            )
        if is_tagged(member):
            tagged.append((name, member))
    return tagged


def _strip_annotated(annotation: Any) -> Any:
    if get_origin(annotation) is Annotated:
        return get_args(annotation)[0]
    return annotation


def _function_hints(cls: type, func: Callable, include_extras: bool = False) -> dict[str, Any]:
    try:
        return get_type_hints(func, include_extras=include_extras)
    except (NameError, AttributeError, SyntaxError, TypeError) as e:
        raise DependencyError(
            "Annotations of method <%s.%s> cannot be resolved: %s"
            % (cls.__qualname__, func.__name__, e)
        ) from e


def _own_annotations(klass: type) -> dict[str, Any]:
    try:
        return dict(inspect.get_annotations(klass))
    except (NameError, AttributeError, SyntaxError, TypeError) as e:
        raise DependencyError(
            "Annotations of <%s> cannot be read: %s" % (klass.__qualname__, e)
        ) from e


def _may_be_injected(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return "Inject" in annotation
    return get_origin(annotation) is Annotated


def _evaluate(klass: type, name: str, annotation: Any) -> Any:
    module = sys.modules.get(klass.__module__)
    holder = SimpleNamespace(__annotations__={name: annotation})
    try:
        hints = get_type_hints(
            holder,
            dict(vars(module)) if module is not None else {},
            dict(vars(klass)),
            include_extras=True,
        )
    except (NameError, AttributeError, SyntaxError, TypeError) as e:
        raise DependencyError(
            "Annotation of field <%s.%s> cannot be resolved: %s"
            % (klass.__qualname__, name, e)
        ) from e
    return hints[name]


def _injected_fields(cls: type, include_private: bool) -> tuple[FieldInjection, ...]:
    annotations: dict[str, tuple[type, Any]] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for name, annotation in _own_annotations(klass).items():
            annotations[name] = (klass, annotation)

    fields = []
    for name, (klass, annotation) in annotations.items():
        if not _is_scanned(name, include_private) or not _may_be_injected(annotation):
            continue
        hint = _evaluate(klass, name, annotation)
        if get_origin(hint) is not Annotated:
            continue
        base_type, *metadata = get_args(hint)
        if any(is_inject_marker(m) for m in metadata):
            fields.append(FieldInjection(name, base_type))
    return tuple(fields)


def _method_dependencies(cls: type, func: Callable) -> tuple[Dependency, ...]:
    sig = inspect.signature(func)
    hints = _function_hints(cls, func)
    parameters = list(sig.parameters.values())[1:]
    result = []

    for param in parameters:
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            raise DependencyError(
                "Dependency <%s> of injection method <%s.%s> cannot be variadic"
                % (param.name, cls.__qualname__, func.__name__)
            )
        try:
            annotation = hints[param.name]
        except KeyError:
            raise DependencyError(
                "Dependency <%s> of injection method <%s.%s> is not annotated"
                % (param.name, cls.__qualname__, func.__name__)
            )
        result.append(
            Dependency(
                param.name,
                _strip_annotated(annotation),
                param.kind == param.KEYWORD_ONLY,
            )
        )

    return tuple(result)


# Scanned classes stay referenced by these caches for the life of the process;
# a plan also holds its owner type, so weak keys would not release them either.
@lru_cache(maxsize=None)
def injection_plan(cls: type, include_private: bool = True) -> InjectionPlan:
    """Build the :class:`InjectionPlan` for a class.

    Only annotations that can carry the :data:`~scenewire.markers.Inject`
    marker are evaluated, so untagged forward references (for instance names
    imported under ``TYPE_CHECKING``) never affect the scan.

    Args:
        cls: The class to scan.
        include_private: Whether single-underscore members are scanned.

    Returns:
        The plan; it is falsy when the class has no tagged members.

    Raises:
        DependencyError: If an injection method has an unannotated or
            variadic parameter, a tagged annotation cannot be resolved, or an
            ``@inject`` function is wrapped in ``staticmethod``/``classmethod``.
    """
    methods = tuple(
        MethodInjection(name, _method_dependencies(cls, member))
        for name, member in _tagged_members(cls, include_private, is_inject_method)
    )
    return InjectionPlan(cls, _injected_fields(cls, include_private), methods)


def _provided_type(cls: type, name: str, func: Callable) -> type:
    if len(inspect.signature(func).parameters) != 1:
        raise ProviderSignatureError(cls, name, "must not declare parameters besides self")

    return_type = _function_hints(cls, func, include_extras=True).get("return", None)
    if return_type is None or return_type is type(None):
        raise ProviderSignatureError(cls, name, "must declare a return type")
    return _strip_annotated(return_type)


@lru_cache(maxsize=None)
def provide_methods(cls: type, include_private: bool = True) -> tuple[ProvideMethod, ...]:
    """List the provide methods of a class in declaration order.

    Raises:
        ProviderSignatureError: If a provide method takes parameters or has no
            return annotation.
        DependencyError: If a provide method's annotations cannot be resolved
            or it is wrapped in ``staticmethod``/``classmethod``.
    """
    return tuple(
        ProvideMethod(name, _provided_type(cls, name, member))
        for name, member in _tagged_members(cls, include_private, is_provide_method)
    )
