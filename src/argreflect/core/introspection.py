"""Read-only introspection of factory methods and constructors.

Every function in this module is a **pure** query against class
metadata. No side effects, no invocation of the callables it examines.
The results are computed once per target class when a
:class:`~argreflect.core.target_type.TargetType` is built.

Eligibility rules
-----------------
Factory (default name ``from_string``):

1. The attribute exists on the class or one of its bases.
2. It is type-level: ``classmethod`` or ``staticmethod``.
3. It accepts exactly one positional argument, annotated ``str`` or
   left unannotated.
4. Its return annotation, if any, names the target class or a subclass.
   A forward reference that cannot be resolved is left unchecked.

Constructor: the class is concrete, defines ``__init__`` or ``__new__``,
and accepts exactly one positional ``str`` argument.
"""

from __future__ import annotations

import inspect
import sys
import types
import typing
from collections.abc import Callable
from typing import Any

from argreflect.core.models import Declined, StrategyDescriptor, StrategyKind

DEFAULT_FACTORY_NAME: str = "from_string"

_TYPE_LEVEL = (classmethod, staticmethod, types.ClassMethodDescriptorType)
_UNION_ORIGINS = (typing.Union, types.UnionType)


# ---------------------------------------------------------------------------
# Low-level helpers
# ---------------------------------------------------------------------------

def safe_signature(obj: Callable[..., Any]) -> inspect.Signature | None:
    """Return the signature of *obj*, or ``None`` when it has none."""
    try:
        return inspect.signature(obj)
    except (TypeError, ValueError):
        return None


def type_hints(function: object) -> dict[str, Any]:
    """Return evaluated annotations of a Python function.

    Builtins and callables whose annotations cannot be evaluated yield
    ``{}``; callers then fall back to the raw (possibly string)
    annotations of the signature.
    """
    function = getattr(function, "__func__", function)
    if not inspect.isfunction(function):
        return {}
    try:
        return typing.get_type_hints(function)
    except (NameError, TypeError, AttributeError):
        return {}


def _accepts_string(annotation: object) -> bool:
    if annotation is inspect.Parameter.empty or annotation is str or annotation is Any:
        return True
    if isinstance(annotation, str):
        # Unevaluated forward reference.
        return annotation in ("str", "Any", "typing.Any")
    if typing.get_origin(annotation) in _UNION_ORIGINS:
        return any(_accepts_string(arg) for arg in typing.get_args(annotation))
    return False


def _describe(annotation: object) -> str:
    if isinstance(annotation, type):
        return annotation.__name__
    return str(annotation)


def string_parameter_problem(
    signature: inspect.Signature,
    hints: dict[str, Any],
) -> str | None:
    """Explain why *signature* cannot take one string, or return ``None``."""
    try:
        bound = signature.bind("")
    except TypeError:
        return "does not accept exactly one positional argument"

    name = next(iter(bound.arguments))
    parameter = signature.parameters[name]
    annotation = hints.get(name, parameter.annotation)
    if not _accepts_string(annotation):
        return f"takes {_describe(annotation)}, not str"
    return None


def _lookup_forward_ref(name: str, target: type) -> object | None:
    """Find a dotted *name* in the module defining *target*, or ``None``."""
    parts = name.split(".")
    if not all(part.isidentifier() for part in parts):
        return None
    found: object = sys.modules.get(target.__module__)
    for part in parts:
        found = getattr(found, part, None)
        if found is None:
            return None
    return found


def returns_instance_of(annotation: object, target: type) -> bool:
    """Return whether a declared return *annotation* is assignable to *target*.

    Missing annotations and ``Self`` are accepted; unions must be
    assignable member by member, so ``Optional[...]`` is rejected.
    String annotations are looked up in the target's module; those that
    still cannot be resolved (classes local to a function, for example)
    are accepted unchecked, like a missing annotation.
    """
    if annotation is inspect.Signature.empty or annotation is typing.Self:
        return True
    if annotation is Any:
        return True
    if isinstance(annotation, str):
        if annotation in (target.__name__, target.__qualname__, "Self", "typing.Self"):
            return True
        resolved = _lookup_forward_ref(annotation, target)
        if resolved is None or isinstance(resolved, str):
            return True
        return returns_instance_of(resolved, target)

    origin = typing.get_origin(annotation)
    if origin in _UNION_ORIGINS:
        return all(returns_instance_of(arg, target) for arg in typing.get_args(annotation))
    if isinstance(origin, type):
        return issubclass(origin, target)
    if isinstance(annotation, type):
        return issubclass(annotation, target)
    return False


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

def find_factory(
    target: type,
    name: str = DEFAULT_FACTORY_NAME,
) -> StrategyDescriptor | Declined:
    """Locate an eligible parse-from-string factory on *target*."""
    label = f"{target.__name__}.{name}"
    try:
        raw = inspect.getattr_static(target, name)
    except AttributeError:
        return Declined(f"{target.__name__} has no {name!r} attribute")

    if not isinstance(raw, _TYPE_LEVEL):
        return Declined(f"{label} is not a classmethod or staticmethod")

    function = getattr(target, name)
    signature = safe_signature(function)
    if signature is not None:
        hints = type_hints(getattr(raw, "__func__", function))
        problem = string_parameter_problem(signature, hints)
        if problem is not None:
            return Declined(f"{label} {problem}")

        returns = hints.get("return", signature.return_annotation)
        if not returns_instance_of(returns, target):
            return Declined(
                f"{label} returns {_describe(returns)}, not {target.__name__}",
            )

    return StrategyDescriptor(
        kind=StrategyKind.FACTORY,
        name=label,
        function=function,
        signature=signature,
    )


def _has_own_constructor(target: type) -> bool:
    return target.__init__ is not object.__init__ or target.__new__ is not object.__new__


def _constructor_function(target: type) -> object:
    if target.__init__ is not object.__init__:
        return target.__init__
    return target.__new__


def find_constructor(target: type) -> StrategyDescriptor | Declined:
    """Locate a constructor of *target* accepting exactly one string."""
    label = f"{target.__name__}()"
    if inspect.isabstract(target):
        return Declined(f"{target.__name__} is abstract and cannot be instantiated")
    if not _has_own_constructor(target):
        return Declined(f"{target.__name__} has no constructor accepting a string")

    signature = safe_signature(target)
    if signature is not None:
        problem = string_parameter_problem(signature, type_hints(_constructor_function(target)))
        if problem is not None:
            return Declined(f"{label} {problem}")

    return StrategyDescriptor(
        kind=StrategyKind.CONSTRUCTOR,
        name=label,
        function=target,
        signature=signature,
    )
