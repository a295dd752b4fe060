"""``argreflect inspect`` — show how a type would be converted.

Builds the same :class:`~argreflect.core.target_type.TargetType` a
converter would, and renders one row per resolution tier: whether it is
usable, and if not, why it was skipped.  No conversion is performed.
"""

from __future__ import annotations

import sys
from typing import Any

from argreflect.cli import exit_codes
from argreflect.cli.console import console
from argreflect.core.models import Declined, StrategyDescriptor
from argreflect.core.target_type import TargetType


# ---------------------------------------------------------------------------
# Row collectors
# ---------------------------------------------------------------------------

def _enumeration_row(target: TargetType[Any]) -> tuple[str, str, str]:
    """Return (tier, detail, status) for the enumeration tier."""
    if not target.is_enumeration:
        return "enumeration", "not an enumeration", "[dim]SKIP[/dim]"
    names = ", ".join(member.name for member in target.python_type)
    return "enumeration", names or "(no members)", "[green]OK[/green]"


def _strategy_row(
    tier: str,
    found: StrategyDescriptor | Declined,
    *,
    missing_status: str,
) -> tuple[str, str, str]:
    """Return (tier, detail, status) for the factory or constructor tier."""
    if isinstance(found, Declined):
        return tier, found.reason, missing_status
    origin = "registered" if found.registered else "introspected"
    return tier, f"{found.name} ({origin})", "[green]OK[/green]"


def collect_rows(target: TargetType[Any]) -> list[tuple[str, str, str]]:
    """Return the table rows describing *target*, in resolution order."""
    rows = [_enumeration_row(target)]
    if target.is_enumeration:
        return rows
    rows.append(_strategy_row("factory", target.factory, missing_status="[dim]SKIP[/dim]"))
    rows.append(
        _strategy_row("constructor", target.constructor, missing_status="[red]FAIL[/red]"),
    )
    return rows


def resolution_tier(target: TargetType[Any]) -> str | None:
    """Name the tier that will handle conversions, or ``None`` if none can."""
    if target.is_enumeration:
        return "enumeration"
    if target.lookup_factory_method() is not None:
        return "factory"
    if target.lookup_constructor() is not None:
        return "constructor"
    return None


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "SKIP", "OK"):
        if word in status:
            return word
    return status


def _print_plain_table(title: str, rows: list[tuple[str, str, str]]) -> None:
    """Render the tier table without Rich."""
    print(f"\n{title}", file=sys.stderr)
    print("=" * 72, file=sys.stderr)
    print(f"{'Tier':<12} {'Detail':<50} {'Status':<8}", file=sys.stderr)
    print("-" * 72, file=sys.stderr)
    for tier, detail, status in rows:
        print(f"{tier:<12} {detail:<50} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


def run_inspect(target: TargetType[Any]) -> int:
    """Render the tier table for *target*.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when some tier can convert values,
        :data:`exit_codes.CONFIGURATION_ERROR` otherwise.
    """
    title = f"argreflect inspect {target.python_type.__module__}.{target.python_type.__qualname__}"
    rows = collect_rows(target)
    tier = resolution_tier(target)

    try:
        from rich.markup import escape
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_table(title, rows)
        if tier is None:
            print(f"{target.simple_name} cannot be converted from text.", file=sys.stderr)
            return exit_codes.CONFIGURATION_ERROR
        print(f"Values are converted by the {tier} tier.", file=sys.stderr)
        return exit_codes.SUCCESS

    table = Table(
        title=escape(title),
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Tier", style="bold", min_width=12)
    table.add_column("Detail", min_width=30)
    table.add_column("Status", justify="center", min_width=6)
    for row_tier, detail, status in rows:
        table.add_row(row_tier, escape(detail), status)

    console.print()
    console.print(table)
    console.print()

    if tier is None:
        console.print(f"[bold red]{target.simple_name} cannot be converted from text.[/bold red]")
        return exit_codes.CONFIGURATION_ERROR
    console.print(f"[bold green]Values are converted by the {tier} tier.[/bold green]")
    return exit_codes.SUCCESS
