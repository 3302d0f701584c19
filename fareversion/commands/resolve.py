"""Resolve command implementation for fareversion.

Loads a version data file, resolves which version governs the travel date
at the purchase date, and prints the outcome together with an explanation.

Typical usage::

    # Table of all versions with the resolved one highlighted
    $ fareversion resolve versions.json -p 2025-11-01 -t 2025-12-24

    # Treat the close date as exclusive
    $ fareversion resolve versions.json -p 2025-11-01 -t 2025-12-31 --exclusive-end

    # Machine-readable output
    $ fareversion resolve versions.toml -p 1761955200000 -t 2025-12-24 -f json

Exit status is 0 when a version was resolved and 1 otherwise.
"""

from __future__ import annotations

import sys
import json
import dataclasses
from pathlib import Path
from typing import Any, Dict, List, Optional

import click
from rich.table import Column

from fareversion.commands import INSTANT
from fareversion.context import FareVersionContext, pass_context
from fareversion.core import build_explanation, load_versions, resolve_version
from fareversion.exceptions import FareVersionError
from fareversion.models import ResolutionOptions, ResolutionResult, VersionRecord
from fareversion.utils import (
    colorize_reason,
    format_millis,
    get_logger,
    get_raw_console,
    print_error,
    print_table,
)
from fareversion.utils.timeconv import Millis

logger = get_logger("commands.resolve")


@click.command()
@click.argument(
    "file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--purchase-date",
    "-p",
    type=INSTANT,
    required=True,
    help="Purchase date (ISO-8601 or epoch milliseconds).",
)
@click.option(
    "--travel-date",
    "-t",
    type=INSTANT,
    required=True,
    help="Travel date (ISO-8601 or epoch milliseconds).",
)
@click.option(
    "--inclusive-end/--exclusive-end",
    default=None,
    help="Whether a version's close date still covers travel. "
    "Defaults to the configuration (inclusive).",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["table", "simple", "json"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@click.option(
    "--explain/--no-explain",
    default=None,
    help="Print the explanation of the outcome.",
)
@pass_context
def resolve(
    ctx: FareVersionContext,
    file: Path,
    purchase_date: Millis,
    travel_date: Millis,
    inclusive_end: Optional[bool],
    format: str,
    explain: Optional[bool],
) -> None:
    """Resolve which version governs TRAVEL-DATE when bought at PURCHASE-DATE.

    A version is eligible when it was published at or before the purchase
    date and its validity window covers the travel date. The most recently
    published eligible version wins; equal publish dates go to the later
    window start.
    """
    config = ctx.config
    if inclusive_end is None:
        inclusive_end = config.inclusive_end
    if explain is None:
        explain = config.show_explanation

    try:
        versions = load_versions(file)
    except FareVersionError as exc:
        print_error(f"{exc}")
        sys.exit(1)

    options = ResolutionOptions(inclusive_end=inclusive_end)
    result = resolve_version(versions, purchase_date, travel_date, options)
    result = _with_date_format(result, config.date_format)

    logger.info(
        "Resolved %s for purchase=%s travel=%s: %s",
        file,
        purchase_date,
        travel_date,
        result.reason.value,
    )

    fmt = format.lower()
    if fmt == "table":
        _display_table(versions, result, config.date_format)
        _display_summary(result, explain)
    elif fmt == "simple":
        _display_simple(result, explain)
    else:
        print(json.dumps(result.to_json(), indent=2, default=str))

    sys.exit(0 if result.ok else 1)


def _with_date_format(result: ResolutionResult, date_format: str) -> ResolutionResult:
    """Rebuild the explanation so its dates follow the configured format."""
    explanation = build_explanation(
        result.match,
        result.candidates,
        result.available,
        result.future_covering,
        result.purchase_date,
        result.travel_date,
        result.reason,
        result.options.inclusive_end,
        date_format=date_format,
    )
    return dataclasses.replace(result, explanation=explanation)


# ---------------------------------------------------------------------------
# Display renderers
# ---------------------------------------------------------------------------


def _status_for(record: VersionRecord, result: ResolutionResult) -> str:
    """Classify a record relative to the resolution outcome.

    Compared by identity: version names need not be unique.
    """
    if record is result.match:
        return "[status.match]✓ MATCH[/status.match]"
    if any(record is c for c in result.candidates):
        return "[status.superseded]superseded[/status.superseded]"
    if any(record is f for f in result.future_covering):
        return "[status.pending]not yet published[/status.pending]"
    if record.publish_date <= result.purchase_date:
        return "[status.idle]no coverage[/status.idle]"
    return "[status.idle]unpublished[/status.idle]"


def _version_columns() -> List[Column]:
    return [
        Column("Status", no_wrap=True),
        Column("Version", style="version", no_wrap=True),
        Column("Published", justify="center"),
        Column("Open", justify="center", style="dim"),
        Column("Close", justify="center", style="dim"),
    ]


def _display_table(
    versions: List[VersionRecord],
    result: ResolutionResult,
    date_format: str,
) -> None:
    """Render every version with its status in a Rich table."""
    rows: List[Dict[str, Any]] = [
        {
            "Status": _status_for(record, result),
            "Version": record.version,
            "Published": format_millis(record.publish_date, date_format),
            "Open": format_millis(record.open, date_format),
            "Close": format_millis(record.close, date_format),
        }
        for record in sorted(versions, key=lambda v: v.publish_date)
    ]

    boundary = "inclusive" if result.options.inclusive_end else "exclusive"
    print_table(
        rows,
        _version_columns(),
        title="Fare Versions",
        caption=(
            f"purchase {format_millis(result.purchase_date, date_format)} · "
            f"travel {format_millis(result.travel_date, date_format)} · "
            f"close {boundary}"
        ),
    )


def _display_summary(result: ResolutionResult, explain: bool) -> None:
    console = get_raw_console()
    if result.match is not None:
        console.print(
            f"\nResolved version: [status.match]{result.match.version}[/status.match]"
        )
    else:
        console.print(
            f"\nResolved version: [error]none[/error] "
            f"({colorize_reason(result.reason.value)})"
        )
    if explain:
        console.print(result.explanation, style="dim", soft_wrap=True)


def _display_simple(result: ResolutionResult, explain: bool) -> None:
    """One line ``<version or -> <REASON>``, optionally followed by the explanation.

    Example::

        v2 OK
        Version v2 applies: published 2025-10-01, ...
    """
    console = get_raw_console()
    console.print(f"{result.match_version or '-'} {result.reason.value}", highlight=False)
    if explain:
        console.print(result.explanation, highlight=False, soft_wrap=True)
