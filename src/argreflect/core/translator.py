"""Single formatting point for conversion errors.

User-facing failures always read::

    could not convert '<value>' to <TypeName> (<cause message>)

The message is built with plain ``str.format``; no locale-aware
formatting is involved, so the text is identical on every machine.
"""

from __future__ import annotations

from typing import Any

from argreflect.core.models import ConversionRequest
from argreflect.core.target_type import TargetType
from argreflect.exceptions import ConfigurationError, UserInputConversionError

CONVERSION_MESSAGE: str = "could not convert '{value}' to {type_name} ({cause})"


def describe_cause(cause: BaseException | str) -> str:
    """Return the message of *cause*, falling back to its class name."""
    if isinstance(cause, str):
        return cause
    if isinstance(cause, KeyError) and len(cause.args) == 1:
        # str(KeyError) quotes its argument.
        return str(cause.args[0])
    return str(cause) or type(cause).__name__


def format_conversion_message(value: str, type_name: str, cause_message: str) -> str:
    return CONVERSION_MESSAGE.format(value=value, type_name=type_name, cause=cause_message)


def translate(
    request: ConversionRequest,
    target: TargetType[Any],
    cause: BaseException | str,
) -> UserInputConversionError:
    """Build the user-facing error for a rejected *request*.

    When *cause* is an exception it becomes the ``__cause__`` of the
    returned error.
    """
    cause_message = describe_cause(cause)
    error = UserInputConversionError(
        format_conversion_message(request.value, target.simple_name, cause_message),
        value=request.value,
        type_name=target.simple_name,
        cause_message=cause_message,
        parser=request.parser,
        argument=request.argument,
    )
    if isinstance(cause, BaseException):
        error.__cause__ = cause
    return error


def configuration_error(target: TargetType[Any], cause_message: str) -> ConfigurationError:
    """Build the fatal error for a target class with no usable conversion path."""
    return ConfigurationError(
        target.simple_name,
        cause_message,
        hint=(
            f"Give {target.simple_name} a {target.factory_name}() classmethod "
            "or a constructor taking a single str."
        ),
    )
