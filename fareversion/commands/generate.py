"""Generate command implementation for fareversion.

Writes a set of sample version records, handy for trying out ``resolve``.

Typical usage::

    $ fareversion generate --seed 42 --output versions.json
    $ fareversion generate --count 6 --start 2026-01-01 --end 2026-12-31 -f toml
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click

from fareversion.commands import INSTANT
from fareversion.constants import (
    SAMPLE_END_DATE,
    SAMPLE_START_DATE,
    SAMPLE_VERSION_COUNT,
)
from fareversion.context import FareVersionContext, pass_context
from fareversion.core import dump_versions, generate_sample_versions, save_versions
from fareversion.exceptions import FareVersionError
from fareversion.utils import get_logger, print_error, print_success
from fareversion.utils.timeconv import Millis

logger = get_logger("commands.generate")


@click.command()
@click.option(
    "--count",
    "-n",
    type=click.IntRange(min=1),
    default=SAMPLE_VERSION_COUNT,
    show_default=True,
    help="Number of versions to generate.",
)
@click.option(
    "--start",
    type=INSTANT,
    default=SAMPLE_START_DATE,
    show_default=True,
    help="Start of the timeline.",
)
@click.option(
    "--end",
    type=INSTANT,
    default=SAMPLE_END_DATE,
    show_default=True,
    help="End of the timeline.",
)
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Random seed for reproducible output.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write to this file (.json or .toml) instead of stdout.",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["json", "toml"], case_sensitive=False),
    default="json",
    help="Output format when writing to stdout.",
)
@pass_context
def generate(
    ctx: FareVersionContext,
    count: int,
    start: Millis,
    end: Millis,
    seed: Optional[int],
    output: Optional[Path],
    format: str,
) -> None:
    """Generate sample version data spread over a timeline."""
    if end <= start:
        raise click.BadParameter("must be after --start", param_hint="--end")

    records = generate_sample_versions(count, start=start, end=end, seed=seed)
    logger.info("Generated %d sample version(s) (seed=%s)", len(records), seed)

    if output is None:
        click.echo(dump_versions(records, format.lower()), nl=False)
        return

    try:
        save_versions(output, records, create_backup=False)
    except FareVersionError as exc:
        print_error(f"{exc}")
        sys.exit(1)

    print_success(f"Wrote {len(records)} version(s) to {output}")
