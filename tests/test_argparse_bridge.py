"""Tests for argparse integration (infra/argparse_bridge.py).

Real ``argparse`` parsers are used throughout since the bridge is only
meaningful against the library it adapts to.
"""

from __future__ import annotations

import argparse
import enum

import pytest

from argreflect.exceptions import ConfigurationError, UserInputConversionError
from argreflect.infra.argparse_bridge import (
    ArgumentTypeAdapter,
    ConvertingAction,
    add_reflected_argument,
    reflected_type,
)


class Lang(enum.Enum):
    PYTHON = 1
    CPP = 2
    JAVA = 3


class Unconvertible:
    pass


def _parser(*, exit_on_error: bool = False) -> argparse.ArgumentParser:
    return argparse.ArgumentParser(prog="prog", exit_on_error=exit_on_error)


# ---------------------------------------------------------------------------
# ConvertingAction
# ---------------------------------------------------------------------------

class TestConvertingAction:
    def test_option_is_converted(self) -> None:
        parser = _parser()
        add_reflected_argument(parser, "--lang", target=Lang)
        assert parser.parse_args(["--lang", "CPP"]).lang is Lang.CPP

    def test_positional_is_converted(self) -> None:
        parser = _parser()
        add_reflected_argument(parser, "count", target=int)
        assert parser.parse_args(["5"]).count == 5

    def test_nargs_converts_each_value(self) -> None:
        parser = _parser()
        add_reflected_argument(parser, "--ports", target=int, nargs="+")
        assert parser.parse_args(["--ports", "80", "443"]).ports == [80, 443]

    def test_default_is_stored_as_given(self) -> None:
        parser = _parser()
        add_reflected_argument(parser, "--lang", target=Lang, default=Lang.JAVA)
        assert parser.parse_args([]).lang is Lang.JAVA

    def test_string_default_is_not_converted(self) -> None:
        parser = _parser()
        add_reflected_argument(parser, "--n", target=int, default="5")
        assert parser.parse_args([]).n == "5"

    def test_add_argument_keyword_form(self) -> None:
        parser = _parser()
        action = parser.add_argument("--lang", action=ConvertingAction, target=Lang)
        assert isinstance(action, ConvertingAction)
        assert action.converter.target.python_type is Lang

    def test_user_error_becomes_argument_error(self) -> None:
        parser = _parser()
        add_reflected_argument(parser, "--lang", target=Lang)
        with pytest.raises(argparse.ArgumentError) as exc_info:
            parser.parse_args(["--lang", "C"])
        err = exc_info.value
        assert err.argument_name == "--lang"
        assert str(err).startswith("argument --lang: could not convert 'C' to Lang (")

    def test_parser_and_action_travel_with_the_error(self) -> None:
        parser = _parser()
        action = add_reflected_argument(parser, "--lang", target=Lang)
        with pytest.raises(argparse.ArgumentError) as exc_info:
            parser.parse_args(["--lang", "C"])
        cause = exc_info.value.__cause__
        assert isinstance(cause, UserInputConversionError)
        assert cause.parser is parser
        assert cause.argument is action

    def test_exit_on_error_reports_usage_error(
        self, capsys: pytest.CaptureFixture[str],
    ) -> None:
        parser = _parser(exit_on_error=True)
        add_reflected_argument(parser, "--n", target=int)
        with pytest.raises(SystemExit) as exc_info:
            parser.parse_args(["--n", "0x100"])
        assert exc_info.value.code == 2
        assert (
            "argument --n: could not convert '0x100' to int "
            "(invalid literal for int() with base 10: '0x100')"
        ) in capsys.readouterr().err

    def test_configuration_error_is_not_a_usage_error(self) -> None:
        parser = _parser(exit_on_error=True)
        add_reflected_argument(parser, "--thing", target=Unconvertible)
        with pytest.raises(ConfigurationError):
            parser.parse_args(["--thing", "x"])

    def test_non_class_target_fails_at_registration(self) -> None:
        parser = _parser()
        with pytest.raises(ConfigurationError):
            add_reflected_argument(parser, "--x", target="int")  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# reflected_type (type= callable)
# ---------------------------------------------------------------------------

class TestReflectedType:
    def test_converts(self) -> None:
        parser = _parser()
        parser.add_argument("--lang", type=reflected_type(Lang))
        assert parser.parse_args(["--lang", "PYTHON"]).lang is Lang.PYTHON

    def test_full_message_is_kept(self) -> None:
        parser = _parser()
        parser.add_argument("--n", type=reflected_type(int))
        with pytest.raises(argparse.ArgumentError) as exc_info:
            parser.parse_args(["--n", "0x100"])
        assert str(exc_info.value) == (
            "argument --n: could not convert '0x100' to int "
            "(invalid literal for int() with base 10: '0x100')"
        )

    def test_configuration_error_escapes_argparse(self) -> None:
        parser = _parser(exit_on_error=True)
        parser.add_argument("--thing", type=reflected_type(Unconvertible))
        with pytest.raises(ConfigurationError):
            parser.parse_args(["--thing", "x"])

    def test_direct_call_raises_argument_type_error(self) -> None:
        with pytest.raises(argparse.ArgumentTypeError) as exc_info:
            reflected_type(Lang)("RUBY")
        assert isinstance(exc_info.value.__cause__, UserInputConversionError)

    def test_name_and_repr(self) -> None:
        adapter = reflected_type(Lang)
        assert isinstance(adapter, ArgumentTypeAdapter)
        assert adapter.__name__ == "Lang"
        assert repr(adapter) == "reflected_type(Lang)"
