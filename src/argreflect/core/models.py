"""Domain models for argreflect.

All models are **frozen** dataclasses: immutable value objects with no
behaviour beyond data access.  A conversion attempt produces exactly one
of :class:`Resolved`, :class:`Declined` or :class:`Failed`; fallback
between strategies is decided by inspecting that value, never by
catching an exception.
"""

from __future__ import annotations

import enum
import inspect
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from argreflect.exceptions import ConfigurationError, UserInputConversionError

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ConversionRequest:
    """Raw text plus the caller's context.

    ``parser`` and ``argument`` are opaque: they are only threaded
    through to the user-facing error.
    """

    value: str
    """The raw command-line text."""

    parser: object = None
    """Parser that requested the conversion, or ``None``."""

    argument: object = None
    """Argument descriptor (e.g. an ``argparse.Action``), or ``None``."""


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Resolved(Generic[T]):
    """A strategy produced a value."""

    value: T


@dataclass(frozen=True, slots=True)
class Declined:
    """A strategy does not apply; the next one should be tried."""

    reason: str


@dataclass(frozen=True, slots=True)
class Failed:
    """A strategy applied and failed.  Terminal."""

    error: UserInputConversionError | ConfigurationError

    @property
    def is_fatal(self) -> bool:
        """``True`` for configuration errors, ``False`` for user errors."""
        return isinstance(self.error, ConfigurationError)


ConversionOutcome = Resolved[Any] | Declined | Failed
"""Tri-state result of a single resolver or of a whole conversion."""


# ---------------------------------------------------------------------------
# Strategy descriptors
# ---------------------------------------------------------------------------

class StrategyKind(enum.Enum):
    """Which resolution tier a descriptor belongs to."""

    FACTORY = "factory"
    CONSTRUCTOR = "constructor"


@dataclass(frozen=True, slots=True)
class StrategyDescriptor:
    """A conversion callable that passed every eligibility check."""

    kind: StrategyKind
    name: str
    """Display name, e.g. ``"Color.from_string"``."""

    function: Callable[[str], Any]
    """Callable invoked with the raw text."""

    signature: inspect.Signature | None
    """Introspected signature, or ``None`` when the callable has none."""

    registered: bool = False
    """``True`` when bound explicitly through a strategy registry."""
