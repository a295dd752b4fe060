"""Custom exception hierarchy for argreflect.

All exceptions that cross layer boundaries must inherit from
:class:`ArgReflectError`.  Raw exceptions raised by a target type's own
parsing logic never escape the converter unwrapped: they are attached
as ``__cause__`` of a :class:`UserInputConversionError`.

Hierarchy
---------
ArgReflectError
├── UserInputConversionError
├── ConfigurationError
├── StrategyUnavailable
├── TypeResolutionError
└── EnvironmentError

The two conversion tiers are disjoint on purpose:
:class:`ConfigurationError` is neither a ``TypeError`` nor a
``ValueError``, so ``argparse`` cannot report it as an invalid value.
"""

from __future__ import annotations


class ArgReflectError(Exception):
    """Base exception for all argreflect errors.

    Every error condition the CLI knows how to render maps to a
    subclass of this exception.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Conversion ------------------------------------------------------------

class UserInputConversionError(ArgReflectError):
    """The supplied text was rejected by the target type's parsing logic.

    Recoverable: the surrounding parser shows :attr:`message` to the end
    user together with the offending argument.
    """

    def __init__(
        self,
        message: str,
        *,
        value: str,
        type_name: str,
        cause_message: str,
        parser: object = None,
        argument: object = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.message: str = message
        self.value: str = value
        self.type_name: str = type_name
        self.cause_message: str = cause_message
        self.parser: object = parser
        self.argument: object = argument


class ConfigurationError(ArgReflectError):
    """The target type offers no usable conversion path.

    Fatal: signals a mistake in how the argument was registered, not in
    what the user typed.
    """

    def __init__(
        self,
        type_name: str,
        cause_message: str,
        *,
        hint: str | None = None,
    ) -> None:
        super().__init__(
            f"reflect type conversion error for {type_name}: {cause_message}",
            hint=hint,
        )
        self.type_name: str = type_name
        self.cause_message: str = cause_message


class StrategyUnavailable(ArgReflectError):
    """Raised *by* a conversion strategy that cannot run in this environment.

    A factory raising this (e.g. because an optional parsing library is
    not installed) is skipped and the constructor is tried instead.  A
    constructor raising it is a configuration error.
    """


# --- Type loading ----------------------------------------------------------

class TypeResolutionError(ArgReflectError):
    """Raised when a dotted type path cannot be resolved to a class."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(ArgReflectError):
    """Raised when an optional runtime dependency is not available."""
