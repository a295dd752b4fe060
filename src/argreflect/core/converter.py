"""Core type converter — the entry point used by argument parsers.

A :class:`ReflectArgumentType` is created once per target class, at
argument-registration time, and reused for every value.  It holds only
the immutable :class:`~argreflect.core.target_type.TargetType`, so one
instance may be shared across threads without locking.

Guarantees
----------
* Every call ends in exactly one of: a typed value,
  :class:`~argreflect.exceptions.UserInputConversionError`, or
  :class:`~argreflect.exceptions.ConfigurationError`.
* Repeated calls with the same text produce equal outcomes.
"""

from __future__ import annotations

import argparse
import logging
from typing import Generic, TypeVar

from argreflect.core.introspection import DEFAULT_FACTORY_NAME
from argreflect.core.models import ConversionRequest, Declined, Failed, Resolved
from argreflect.core.protocols import Resolver
from argreflect.core.registry import StrategyRegistry
from argreflect.core.resolvers import ConstructorResolver, EnumResolver, FactoryResolver
from argreflect.core.target_type import TargetType
from argreflect.core.translator import configuration_error
from argreflect.exceptions import UserInputConversionError

T = TypeVar("T")

logger = logging.getLogger(__name__)

RESOLUTION_ORDER: tuple[Resolver, ...] = (
    EnumResolver(),
    FactoryResolver(),
    ConstructorResolver(),
)
"""Resolvers tried in order; the first outcome that is not ``Declined`` wins."""


class ReflectArgumentType(Generic[T]):
    """Convert command-line text into instances of *target*.

    Parameters
    ----------
    target:
        The class values are converted into.
    factory_name:
        Name of the type-level parse-from-string factory to look for.
    registry:
        Explicit strategies consulted before introspection.  Defaults to
        :data:`~argreflect.core.registry.default_registry`.

    Raises
    ------
    ConfigurationError
        If *target* is not a class.
    """

    __slots__ = ("_target",)

    def __init__(
        self,
        target: type[T],
        *,
        factory_name: str = DEFAULT_FACTORY_NAME,
        registry: StrategyRegistry | None = None,
    ) -> None:
        self._target: TargetType[T] = TargetType.of(
            target, factory_name=factory_name, registry=registry,
        )

    @property
    def target(self) -> TargetType[T]:
        return self._target

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._target.simple_name})"

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(
        self,
        parser: object,
        argument: object,
        value: str,
    ) -> Resolved[T] | Failed:
        """Convert *value* without raising; return the tagged outcome."""
        request = ConversionRequest(value=value, parser=parser, argument=argument)
        if not isinstance(value, str):
            return Failed(
                configuration_error(
                    self._target,
                    f"conversion input must be str, got {type(value).__name__}",
                ),
            )

        for resolver in RESOLUTION_ORDER:
            outcome = resolver.resolve(self._target, request)
            if isinstance(outcome, Declined):
                logger.debug(
                    "%s tier declined %s: %s",
                    resolver.name, self._target.simple_name, outcome.reason,
                )
                continue
            logger.debug(
                "%s tier %s %r for %s",
                resolver.name,
                "resolved" if isinstance(outcome, Resolved) else "rejected",
                value,
                self._target.simple_name,
            )
            return outcome

        return Failed(configuration_error(self._target, "no conversion tier applies"))

    def convert(self, parser: object, argument: object, value: str) -> T:
        """Convert *value* into the target class.

        Parameters
        ----------
        parser, argument:
            Opaque caller context attached to user-facing errors.
        value:
            Raw command-line text.

        Raises
        ------
        UserInputConversionError
            The target type's own parsing logic rejected *value*.
        ConfigurationError
            The target type offers no usable conversion path.
        """
        outcome = self.resolve(parser, argument, value)
        if isinstance(outcome, Failed):
            raise outcome.error
        return outcome.value

    def __call__(self, value: str) -> T:
        """Convert *value* when used as an ``argparse`` ``type=`` callable.

        User errors are re-raised as ``argparse.ArgumentTypeError`` so the
        parser reports the full message as a usage error.
        :class:`~argreflect.exceptions.ConfigurationError` is not a
        ``TypeError``/``ValueError`` and therefore escapes the parser.
        """
        try:
            return self.convert(None, None, value)
        except UserInputConversionError as exc:
            raise argparse.ArgumentTypeError(exc.message) from exc
