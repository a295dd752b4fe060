"""Tests for the ``argreflect`` CLI (cli/app.py, cli/inspect_command.py).

Only standard-library target types are used so every type path is
importable without test-only modules on ``sys.path``.

Coverage:
* ``convert`` prints the value and its runtime type.
* ``inspect`` renders one row per tier and picks the right exit code.
* ``cli()`` maps every error family to its exit code.
* ``--verbose`` attaches a handler to the ``argreflect`` logger.
"""

from __future__ import annotations

import logging
import sys

import pytest

from argreflect.cli import exit_codes
from argreflect.cli.app import cli, main
from argreflect.cli.inspect_command import collect_rows, resolution_tier
from argreflect.core.target_type import TargetType
from argreflect.exceptions import (
    ConfigurationError,
    TypeResolutionError,
    UserInputConversionError,
)


# ---------------------------------------------------------------------------
# convert
# ---------------------------------------------------------------------------

class TestConvertCommand:
    def test_int(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["convert", "int", "100"])
        err = capsys.readouterr().err
        assert code == exit_codes.SUCCESS
        assert "100" in err
        assert "builtins.int" in err

    def test_enumeration(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["convert", "http.HTTPStatus", "NOT_FOUND"])
        assert code == exit_codes.SUCCESS
        assert "HTTPStatus.NOT_FOUND" in capsys.readouterr().err

    def test_repr_with_brackets_is_not_markup(
        self, capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = main(["convert", "bytes", "[x]"])
        assert code == exit_codes.SUCCESS
        assert "b'[x]'" in capsys.readouterr().err

    def test_user_error_propagates(self) -> None:
        with pytest.raises(UserInputConversionError, match="could not convert '0x100' to int"):
            main(["convert", "int", "0x100"])

    def test_configuration_error_propagates(self) -> None:
        with pytest.raises(ConfigurationError):
            main(["convert", "object", "x"])

    def test_bad_type_path_propagates(self) -> None:
        with pytest.raises(TypeResolutionError):
            main(["convert", "no_such_module_for_argreflect.T", "x"])


# ---------------------------------------------------------------------------
# inspect
# ---------------------------------------------------------------------------

class TestInspectCommand:
    def test_constructor_type(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["inspect", "int"])
        err = capsys.readouterr().err
        assert code == exit_codes.SUCCESS
        assert "constructor" in err

    def test_enumeration_type(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["inspect", "http.HTTPStatus"])
        assert code == exit_codes.SUCCESS
        assert "enumeration" in capsys.readouterr().err

    def test_unconvertible_type(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["inspect", "object"])
        assert code == exit_codes.CONFIGURATION_ERROR
        assert "cannot be converted" in capsys.readouterr().err

    def test_rows_follow_resolution_order(self) -> None:
        rows = collect_rows(TargetType.of(int))
        assert [row[0] for row in rows] == ["enumeration", "factory", "constructor"]
        assert "SKIP" in rows[0][2]
        assert "SKIP" in rows[1][2]
        assert "OK" in rows[2][2]

    def test_registered_factory_row(self) -> None:
        import datetime

        rows = collect_rows(TargetType.of(datetime.date))
        assert "registered" in rows[1][1]

    def test_enumeration_has_single_row(self) -> None:
        import http

        rows = collect_rows(TargetType.of(http.HTTPStatus))
        assert len(rows) == 1
        assert "NOT_FOUND" in rows[0][1]

    def test_resolution_tier(self) -> None:
        import datetime

        assert resolution_tier(TargetType.of(int)) == "constructor"
        assert resolution_tier(TargetType.of(datetime.date)) == "factory"
        assert resolution_tier(TargetType.of(object)) is None


# ---------------------------------------------------------------------------
# Error boundary
# ---------------------------------------------------------------------------

def _run_cli(monkeypatch: pytest.MonkeyPatch, *args: str) -> int:
    monkeypatch.setattr(sys, "argv", ["argreflect", *args])
    with pytest.raises(SystemExit) as exc_info:
        cli()
    return int(exc_info.value.code or 0)


class TestErrorBoundary:
    def test_success(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert _run_cli(monkeypatch, "convert", "int", "1") == exit_codes.SUCCESS

    def test_user_error(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = _run_cli(monkeypatch, "convert", "int", "0x100")
        assert code == exit_codes.GENERAL_ERROR
        assert "could not convert '0x100' to int" in capsys.readouterr().err

    def test_configuration_error(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = _run_cli(monkeypatch, "convert", "object", "x")
        err = capsys.readouterr().err
        assert code == exit_codes.CONFIGURATION_ERROR
        assert "Configuration error" in err
        assert "Hint" in err

    def test_type_resolution_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        code = _run_cli(monkeypatch, "convert", "nosuchbuiltin", "x")
        assert code == exit_codes.GENERAL_ERROR

    def test_unexpected_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from argreflect.cli import app as app_module

        def boom(argv: list[str] | None = None) -> int:
            raise RuntimeError("kaboom")

        monkeypatch.setattr(app_module, "main", boom)
        assert _run_cli(monkeypatch) == exit_codes.UNEXPECTED_ERROR

    def test_keyboard_interrupt(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from argreflect.cli import app as app_module

        def interrupted(argv: list[str] | None = None) -> int:
            raise KeyboardInterrupt

        monkeypatch.setattr(app_module, "main", interrupted)
        assert _run_cli(monkeypatch) == exit_codes.KEYBOARD_INTERRUPT


# ---------------------------------------------------------------------------
# --verbose
# ---------------------------------------------------------------------------

class TestVerbose:
    def test_verbose_enables_debug_logging(self) -> None:
        logger = logging.getLogger("argreflect")
        logger.handlers.clear()
        assert main(["--verbose", "convert", "int", "3"]) == exit_codes.SUCCESS
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_repeated_runs_do_not_stack_handlers(self) -> None:
        logger = logging.getLogger("argreflect")
        logger.handlers.clear()
        main(["-v", "convert", "int", "3"])
        main(["-v", "convert", "int", "4"])
        assert len(logger.handlers) == 1

    def test_quiet_by_default(self) -> None:
        logger = logging.getLogger("argreflect")
        logger.handlers.clear()
        main(["convert", "int", "3"])
        assert logger.handlers == []
