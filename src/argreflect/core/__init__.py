"""Core layer — conversion dispatch, introspection and error formatting.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* Conversion failures are reported as outcomes, never as control-flow
  exceptions between tiers.
"""

from argreflect.core.converter import RESOLUTION_ORDER, ReflectArgumentType
from argreflect.core.models import (
    ConversionOutcome,
    ConversionRequest,
    Declined,
    Failed,
    Resolved,
    StrategyDescriptor,
    StrategyKind,
)
from argreflect.core.protocols import ParseFunction, Resolver
from argreflect.core.registry import StrategyRegistry, default_registry
from argreflect.core.target_type import TargetType

__all__: list[str] = [
    "RESOLUTION_ORDER",
    "ConversionOutcome",
    "ConversionRequest",
    "Declined",
    "Failed",
    "ParseFunction",
    "ReflectArgumentType",
    "Resolved",
    "Resolver",
    "StrategyDescriptor",
    "StrategyKind",
    "StrategyRegistry",
    "TargetType",
    "default_registry",
]
