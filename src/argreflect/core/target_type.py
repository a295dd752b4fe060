"""Immutable descriptor of a conversion target class."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Generic, TypeVar

from argreflect.core.introspection import DEFAULT_FACTORY_NAME, find_constructor, find_factory
from argreflect.core.models import Declined, StrategyDescriptor
from argreflect.core.registry import StrategyRegistry, default_registry
from argreflect.exceptions import ConfigurationError

T = TypeVar("T")

_ENUMERATION_ONLY = Declined("enumerations are resolved by member name")


@dataclass(frozen=True, slots=True)
class TargetType(Generic[T]):
    """What a converter knows about its target class.

    Factory and constructor lookups are performed once, in :meth:`of`,
    and stored either as a :class:`StrategyDescriptor` or as the
    :class:`Declined` reason explaining why the tier is unusable.
    """

    python_type: type[T]
    factory_name: str
    factory: StrategyDescriptor | Declined
    constructor: StrategyDescriptor | Declined

    @classmethod
    def of(
        cls,
        python_type: type[T],
        *,
        factory_name: str = DEFAULT_FACTORY_NAME,
        registry: StrategyRegistry | None = None,
    ) -> TargetType[T]:
        """Describe *python_type*, consulting *registry* before introspection.

        Raises
        ------
        ConfigurationError
            If *python_type* is not a class.
        """
        if not isinstance(python_type, type):
            raise ConfigurationError(
                repr(python_type),
                "conversion target must be a class",
            )

        if issubclass(python_type, enum.Enum):
            return cls(python_type, factory_name, _ENUMERATION_ONLY, _ENUMERATION_ONLY)

        if registry is None:
            registry = default_registry
        return cls(
            python_type=python_type,
            factory_name=factory_name,
            factory=registry.factory_for(python_type) or find_factory(python_type, factory_name),
            constructor=(
                registry.constructor_for(python_type) or find_constructor(python_type)
            ),
        )

    @property
    def is_enumeration(self) -> bool:
        return issubclass(self.python_type, enum.Enum)

    @property
    def simple_name(self) -> str:
        """Unqualified class name used in user-facing messages."""
        return self.python_type.__name__

    def lookup_factory_method(self, name: str | None = None) -> StrategyDescriptor | None:
        """Return the eligible factory named *name*, or ``None``.

        The configured factory name is answered from the cached lookup;
        any other name is introspected on demand.
        """
        if name is None or name == self.factory_name:
            found = self.factory
        else:
            found = find_factory(self.python_type, name)
        return found if isinstance(found, StrategyDescriptor) else None

    def lookup_constructor(self) -> StrategyDescriptor | None:
        """Return the eligible single-string constructor, or ``None``."""
        found = self.constructor
        return found if isinstance(found, StrategyDescriptor) else None
