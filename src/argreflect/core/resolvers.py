"""The three resolution tiers, in priority order.

Each resolver satisfies :class:`~argreflect.core.protocols.Resolver`
and reports its result as data:

* :class:`EnumResolver` never declines for an enumeration, so it is
  terminal for those types and declines for everything else.
* :class:`FactoryResolver` declines when no eligible factory exists or
  the factory reports itself unavailable.
* :class:`ConstructorResolver` never declines; a missing constructor
  is a configuration error.
"""

from __future__ import annotations

import logging
from typing import Any

from argreflect.core.models import (
    ConversionOutcome,
    ConversionRequest,
    Declined,
    Failed,
    Resolved,
    StrategyDescriptor,
)
from argreflect.core.target_type import TargetType
from argreflect.core.translator import configuration_error, translate
from argreflect.exceptions import ConfigurationError, StrategyUnavailable

logger = logging.getLogger(__name__)


def _invoke(
    descriptor: StrategyDescriptor,
    target: TargetType[Any],
    request: ConversionRequest,
) -> ConversionOutcome:
    """Call *descriptor* with the raw value and classify what happens."""
    try:
        value = descriptor.function(request.value)
    except StrategyUnavailable as exc:
        return Declined(f"{descriptor.name} is unavailable: {exc}")
    except ConfigurationError as exc:
        return Failed(exc)
    except Exception as exc:
        return Failed(translate(request, target, exc))
    return Resolved(value)


class EnumResolver:
    """Exact, case-sensitive lookup of a canonical enumeration member."""

    name = "enumeration"

    def resolve(
        self,
        target: TargetType[Any],
        request: ConversionRequest,
    ) -> ConversionOutcome:
        if not target.is_enumeration:
            return Declined(f"{target.simple_name} is not an enumeration")

        # Iteration skips aliases, so only canonical names match.
        members = {member.name: member for member in target.python_type}
        member = members.get(request.value)
        if member is None:
            if members:
                cause = f"no member named '{request.value}'; choose from {', '.join(members)}"
            else:
                cause = f"{target.simple_name} has no members"
            return Failed(translate(request, target, cause))
        return Resolved(member)


class FactoryResolver:
    """Type-level ``from_string`` style factory."""

    name = "factory"

    def resolve(
        self,
        target: TargetType[Any],
        request: ConversionRequest,
    ) -> ConversionOutcome:
        found = target.factory
        if isinstance(found, Declined):
            return found
        return _invoke(found, target, request)


class ConstructorResolver:
    """Single-string constructor; the last tier."""

    name = "constructor"

    def resolve(
        self,
        target: TargetType[Any],
        request: ConversionRequest,
    ) -> ConversionOutcome:
        found = target.constructor
        if isinstance(found, Declined):
            logger.debug("No usable constructor on %s: %s", target.simple_name, found.reason)
            return Failed(configuration_error(target, found.reason))

        outcome = _invoke(found, target, request)
        if isinstance(outcome, Declined):
            logger.debug("Constructor of %s refused to run: %s", target.simple_name, outcome.reason)
            return Failed(configuration_error(target, outcome.reason))
        return outcome
