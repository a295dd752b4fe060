"""CLI application entry point and command routing for argreflect.

This module is the **sole error boundary** for the entire application.
It catches :class:`~argreflect.exceptions.ArgReflectError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No conversion logic lives here; all work is delegated to the core
  and infrastructure layers.
* ``print()`` is forbidden outside the CLI layer; the console proxy is
  used for output.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys

from argreflect.cli import exit_codes
from argreflect.cli.console import console, escape
from argreflect.core.introspection import DEFAULT_FACTORY_NAME
from argreflect.exceptions import ArgReflectError, ConfigurationError
from argreflect.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    * ``argreflect convert TYPE VALUE`` — convert one value and show it
    * ``argreflect inspect TYPE``       — show which tier would convert
    * ``argreflect --version``
    """
    parser = argparse.ArgumentParser(
        prog="argreflect",
        description="Convert command-line text into typed Python values.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every resolution decision to stderr.",
    )

    commands = parser.add_subparsers(dest="command")

    convert = commands.add_parser("convert", help="Convert VALUE into TYPE.")
    convert.add_argument("type_path", metavar="TYPE", help="int, module.Name or module:Name")
    convert.add_argument("value", metavar="VALUE", help="Raw text to convert.")

    inspect = commands.add_parser("inspect", help="Show how TYPE would be converted.")
    inspect.add_argument("type_path", metavar="TYPE", help="int, module.Name or module:Name")

    for sub in (convert, inspect):
        sub.add_argument(
            "--factory-name",
            default=DEFAULT_FACTORY_NAME,
            help=f"Factory method to look for (default: {DEFAULT_FACTORY_NAME}).",
        )
    return parser


def _configure_logging(verbose: bool) -> None:
    """Attach a DEBUG handler to the ``argreflect`` logger when *verbose*."""
    if not verbose:
        return
    logger = logging.getLogger("argreflect")
    logger.setLevel(logging.DEBUG)
    if logger.handlers:
        return
    try:
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    else:
        handler = RichHandler(show_time=False, show_path=False)
    logger.addHandler(handler)


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_convert(type_path: str, value: str, factory_name: str) -> int:
    """Convert *value* and print its ``repr`` and runtime type."""
    from argreflect.core.converter import ReflectArgumentType
    from argreflect.infra.type_loader import load_type

    converter = ReflectArgumentType(load_type(type_path), factory_name=factory_name)
    result = converter.convert(None, None, value)

    console.print(repr(result), markup=False)
    console.print(f"[dim]{type(result).__module__}.{type(result).__qualname__}[/dim]")
    return exit_codes.SUCCESS


def _handle_inspect(type_path: str, factory_name: str) -> int:
    """Dispatch the ``inspect`` command."""
    from argreflect.cli.inspect_command import run_inspect
    from argreflect.core.target_type import TargetType
    from argreflect.infra.type_loader import load_type

    return run_inspect(TargetType.of(load_type(type_path), factory_name=factory_name))


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the argreflect CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    if args.command == "inspect":
        return _handle_inspect(args.type_path, args.factory_name)

    return _handle_convert(args.type_path, args.value, args.factory_name)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except ConfigurationError as exc:
        console.print(f"[bold red]Configuration error:[/bold red] {escape(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_codes.CONFIGURATION_ERROR)
    except ArgReflectError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
