"""Timestamp CLI commands.

Commands:
    orgtime ts parse "2024-03-15 Fri 09:00 +1w" --kind deadline --json
    orgtime ts scan notes.org --json
    orgtime ts adjust "2024-03-15 Fri" -- +1w -2d
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Tuple

import typer
from rich.console import Console
from rich.table import Table

from orgtime.timestamps import DateKind, OrgDate, parse, scan_lines

logger = logging.getLogger(__name__)

console = Console()

timestamps_app = typer.Typer(help="Parse, scan and adjust timestamps")


def _resolve_kind(kind: str) -> DateKind:
    try:
        return DateKind[kind.upper()]
    except KeyError:
        choices = ", ".join(member.value.lower() for member in DateKind)
        raise typer.BadParameter(f"Unknown kind {kind!r}, expected one of: {choices}")


def _split_markers(text: str, inactive: bool) -> Tuple[str, bool]:
    """Strip enclosing markers; a leading ``<`` or ``[`` decides ``active``."""
    body = text.strip()
    active = not inactive
    if body[:1] in ("<", "["):
        active = body[0] == "<"
    return body.strip("<>[] "), active


def _describe(date: OrgDate) -> dict:
    """Fields plus the derived values a scheduling view would look at."""
    data = date.to_dict()
    data.update(
        {
            "adjusted": date.get_adjusted_date().to_string(),
            "repeater": date.get_repeater(),
            "negative_adjustment": date.get_negative_adjustment(),
            "humanized": date.humanize(),
            "week_number": date.get_week_number(),
            "weekend": date.is_weekend(),
        }
    )
    return data


@timestamps_app.command("parse")
def parse_command(
    text: str = typer.Argument(..., help="Timestamp body, e.g. '2024-03-15 Fri 09:00 +1w'"),
    kind: str = typer.Option("none", "--kind", "-k", help="none, scheduled, deadline or closed"),
    inactive: bool = typer.Option(
        False, "--inactive", help="Treat as an inactive [..] timestamp unless TEXT has its own marker"
    ),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Parse a timestamp body and show its fields."""
    body, active = _split_markers(text, inactive)
    date = parse(body, kind=_resolve_kind(kind), active=active)
    data = _describe(date)

    if output_json:
        typer.echo(json.dumps(data, indent=2))
        return

    table = Table(title=date.to_marked_string(), show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for key, value in data.items():
        if key in ("text", "source_range"):
            continue
        table.add_row(key, "" if value is None else str(value))
    console.print(table)


@timestamps_app.command("scan")
def scan_command(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Text file to scan"),
    kind: str = typer.Option("none", "--kind", "-k", help="Kind assigned to every match"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """List every timestamp in a text file with its position."""
    resolved_kind = _resolve_kind(kind)
    with path.open(encoding="utf-8") as handle:
        matches = [date for _, date in scan_lines(handle, kind=resolved_kind)]

    if output_json:
        typer.echo(json.dumps([date.to_dict() for date in matches], indent=2))
        return

    if not matches:
        console.print("[yellow]No timestamps found[/yellow]")
        return

    table = Table(title=f"Timestamps in {path.name}")
    table.add_column("Line", justify="right")
    table.add_column("Columns")
    table.add_column("Timestamp", style="cyan")
    table.add_column("Active")
    table.add_column("When")
    for date in matches:
        source = date.source_range
        table.add_row(
            str(source.start_line),
            f"{source.start_col}-{source.end_col}",
            date.to_marked_string(),
            "yes" if date.active else "no",
            date.humanize(),
        )
    console.print(table)
    console.print(f"\n{len(matches)} timestamp(s)")


@timestamps_app.command("adjust")
def adjust_command(
    text: str = typer.Argument(..., help="Timestamp body to start from"),
    tokens: List[str] = typer.Argument(..., help="Adjustment tokens applied in order; put them after -- when negative"),
    inactive: bool = typer.Option(
        False, "--inactive", help="Treat as an inactive [..] timestamp unless TEXT has its own marker"
    ),
) -> None:
    """Apply adjustment tokens to a timestamp and print the result."""
    body, active = _split_markers(text, inactive)
    date = parse(body, active=active)
    for token in tokens:
        date = date.adjust(token)
        logger.debug("After %s: %s", token, date)
    typer.echo(date.to_marked_string())
