"""Integration with the standard library's :mod:`argparse`.

User-input errors become ``argparse.ArgumentError`` /
``argparse.ArgumentTypeError`` so the parser prints them as usage
errors; configuration errors propagate untouched and abort argument
setup.  A bare :class:`~argreflect.core.converter.ReflectArgumentType`
is itself a valid ``type=`` callable; the helpers here add parser
context and a readable name.

Two integration styles are offered:

* :class:`ConvertingAction` — an ``action=`` class that receives the
  real parser and action, so both travel with every error::

      parser.add_argument("--lang", action=ConvertingAction, target=Lang)

* :func:`reflected_type` — a plain ``type=`` callable for code that
  already uses ``type=``::

      parser.add_argument("--port", type=reflected_type(Port))
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from argreflect.core.converter import ReflectArgumentType
from argreflect.core.introspection import DEFAULT_FACTORY_NAME
from argreflect.core.registry import StrategyRegistry
from argreflect.exceptions import UserInputConversionError

T = TypeVar("T")


class ConvertingAction(argparse.Action):
    """Store action that converts each value with a :class:`ReflectArgumentType`.

    Accepts the usual ``add_argument`` keywords plus ``target``,
    ``factory_name`` and ``registry``.  The converter is built once,
    when the argument is registered, so an unusable *target* fails at
    setup time rather than on first use.  Values produced by ``nargs``
    are converted element by element; defaults are stored as given.
    """

    def __init__(
        self,
        option_strings: Sequence[str],
        dest: str,
        *,
        target: type[Any],
        factory_name: str = DEFAULT_FACTORY_NAME,
        registry: StrategyRegistry | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(option_strings, dest, **kwargs)
        self.converter: ReflectArgumentType[Any] = ReflectArgumentType(
            target, factory_name=factory_name, registry=registry,
        )

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: str | Sequence[Any] | None,
        option_string: str | None = None,
    ) -> None:
        if isinstance(values, list):
            converted: Any = [self._convert(parser, value) for value in values]
        elif values is None:
            converted = values
        else:
            converted = self._convert(parser, values)
        setattr(namespace, self.dest, converted)

    def _convert(self, parser: argparse.ArgumentParser, value: Any) -> Any:
        try:
            return self.converter.convert(parser, self, value)
        except UserInputConversionError as exc:
            raise argparse.ArgumentError(self, exc.message) from exc


def add_reflected_argument(
    parser: argparse.ArgumentParser | argparse._ArgumentGroup,
    *name_or_flags: str,
    target: type[Any],
    **kwargs: Any,
) -> argparse.Action:
    """Register an argument whose values are converted into *target*.

    Thin wrapper around ``add_argument(..., action=ConvertingAction)``.
    Unlike ``type=``, a string ``default`` is stored as given and never
    converted, so pass defaults already typed (``default=Lang.JAVA``).
    """
    return parser.add_argument(
        *name_or_flags, action=ConvertingAction, target=target, **kwargs,
    )


class ArgumentTypeAdapter(Generic[T]):
    """``type=`` callable wrapping a converter.

    Delegates to :meth:`ReflectArgumentType.__call__` and adds the
    ``__name__`` that ``argparse`` reads when it formats messages.
    """

    def __init__(self, converter: ReflectArgumentType[T]) -> None:
        self.converter: ReflectArgumentType[T] = converter
        # argparse reads __name__ when it formats its own messages.
        self.__name__: str = converter.target.simple_name

    def __call__(self, value: str) -> T:
        return self.converter(value)

    def __repr__(self) -> str:
        return f"reflected_type({self.__name__})"


def reflected_type(
    target: type[T],
    *,
    factory_name: str = DEFAULT_FACTORY_NAME,
    registry: StrategyRegistry | None = None,
) -> ArgumentTypeAdapter[T]:
    """Return an ``argparse`` ``type=`` callable converting into *target*."""
    return ArgumentTypeAdapter(
        ReflectArgumentType(target, factory_name=factory_name, registry=registry),
    )
