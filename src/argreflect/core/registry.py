"""Explicit per-type conversion strategies.

Introspection covers most classes, but some types have a constructor
that does not parse text the way a command line expects (``bool("no")``
is ``True``, ``bytes("x")`` needs an encoding, ``datetime.date`` takes
three integers).  A :class:`StrategyRegistry` binds such types to an
explicit factory or constructor callable.  Registered strategies take
precedence over introspection within their tier and go through the same
eligibility checks, at registration time rather than at conversion time.
"""

from __future__ import annotations

import datetime
from collections.abc import Callable
from typing import Any

from argreflect.core.introspection import (
    returns_instance_of,
    safe_signature,
    string_parameter_problem,
    type_hints,
)
from argreflect.core.models import StrategyDescriptor, StrategyKind
from argreflect.core.protocols import ParseFunction
from argreflect.exceptions import ConfigurationError


class StrategyRegistry:
    """Mapping of exact target classes to explicit conversion callables.

    Lookups fall back to *parent* when a class is not bound locally, so
    a child registry can extend :data:`default_registry` without
    mutating it.
    """

    def __init__(self, parent: StrategyRegistry | None = None) -> None:
        self._parent: StrategyRegistry | None = parent
        self._factories: dict[type, StrategyDescriptor] = {}
        self._constructors: dict[type, StrategyDescriptor] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_factory(self, target: type, function: ParseFunction) -> None:
        """Bind *function* as the factory tier for *target*.

        Raises
        ------
        ConfigurationError
            If *function* cannot take a single string or is declared to
            return something other than *target*.
        """
        self._factories[target] = self._describe(StrategyKind.FACTORY, target, function)

    def register_constructor(self, target: type, function: ParseFunction) -> None:
        """Bind *function* as the constructor tier for *target*."""
        self._constructors[target] = self._describe(
            StrategyKind.CONSTRUCTOR, target, function,
        )

    def factory(self, target: type) -> Callable[[ParseFunction], ParseFunction]:
        """Decorator form of :meth:`register_factory`."""

        def decorator(function: ParseFunction) -> ParseFunction:
            self.register_factory(target, function)
            return function

        return decorator

    def child(self) -> StrategyRegistry:
        """Return an empty registry that falls back to this one."""
        return StrategyRegistry(parent=self)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def factory_for(self, target: type) -> StrategyDescriptor | None:
        if target in self._factories:
            return self._factories[target]
        if self._parent is not None:
            return self._parent.factory_for(target)
        return None

    def constructor_for(self, target: type) -> StrategyDescriptor | None:
        if target in self._constructors:
            return self._constructors[target]
        if self._parent is not None:
            return self._parent.constructor_for(target)
        return None

    def __contains__(self, target: object) -> bool:
        return isinstance(target, type) and (
            self.factory_for(target) is not None
            or self.constructor_for(target) is not None
        )

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @staticmethod
    def _describe(
        kind: StrategyKind,
        target: type,
        function: Callable[..., Any],
    ) -> StrategyDescriptor:
        name = getattr(function, "__qualname__", repr(function))
        if not callable(function):
            raise ConfigurationError(target.__name__, f"{name} is not callable")

        signature = safe_signature(function)
        if signature is not None:
            hints = type_hints(function)
            problem = string_parameter_problem(signature, hints)
            if problem is not None:
                raise ConfigurationError(target.__name__, f"{name} {problem}")
            returns = hints.get("return", signature.return_annotation)
            if not returns_instance_of(returns, target):
                raise ConfigurationError(
                    target.__name__,
                    f"{name} is not declared to return {target.__name__}",
                )

        return StrategyDescriptor(
            kind=kind,
            name=name,
            function=function,
            signature=signature,
            registered=True,
        )


# ---------------------------------------------------------------------------
# Built-in strategies
# ---------------------------------------------------------------------------

_TRUE_TOKENS = frozenset({"1", "true", "yes", "on"})
_FALSE_TOKENS = frozenset({"0", "false", "no", "off"})


def parse_bool(text: str) -> bool:
    """Parse a boolean token (``true``/``false``, ``1``/``0``, ``yes``/``no``, ``on``/``off``)."""
    token = text.strip().lower()
    if token in _TRUE_TOKENS:
        return True
    if token in _FALSE_TOKENS:
        return False
    raise ValueError("expected one of 1, true, yes, on, 0, false, no, off")


def encode_utf8(text: str) -> bytes:
    return text.encode("utf-8")


def _build_default_registry() -> StrategyRegistry:
    registry = StrategyRegistry()
    registry.register_factory(bool, parse_bool)
    registry.register_factory(bytes, encode_utf8)
    registry.register_factory(datetime.date, datetime.date.fromisoformat)
    registry.register_factory(datetime.datetime, datetime.datetime.fromisoformat)
    registry.register_factory(datetime.time, datetime.time.fromisoformat)
    return registry


default_registry: StrategyRegistry = _build_default_registry()
"""Registry consulted when a converter is built without an explicit one."""
