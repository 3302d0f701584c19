"""Move command implementation for fareversion.

Changes the validity window of one version in a data file. If the new
window opens before the version's publish date, the publish date is moved
back to the new opening date.

Typical usage::

    $ fareversion move versions.json v2 --open 2025-10-01 --close 2026-01-31
    $ fareversion move versions.json v2 --open 2025-10-01 --close 2026-01-31 -o moved.json
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click

from fareversion.commands import INSTANT
from fareversion.context import FareVersionContext, pass_context
from fareversion.constants import MS_PER_DAY
from fareversion.core import load_versions, move_window, replace_record, save_versions
from fareversion.exceptions import FareVersionError
from fareversion.utils import (
    format_millis,
    get_logger,
    get_raw_console,
    print_error,
    print_success,
    print_warning,
)
from fareversion.utils.timeconv import Millis

logger = get_logger("commands.move")


@click.command()
@click.argument(
    "file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.argument("version")
@click.option("--open", "open_", type=INSTANT, required=True, help="New window start.")
@click.option("--close", type=INSTANT, required=True, help="New window end.")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the result here instead of updating FILE in place.",
)
@click.option(
    "--backup/--no-backup",
    default=True,
    show_default=True,
    help="Keep a timestamped backup of the file being replaced.",
)
@pass_context
def move(
    ctx: FareVersionContext,
    file: Path,
    version: str,
    open_: Millis,
    close: Millis,
    output: Optional[Path],
    backup: bool,
) -> None:
    """Move the validity window of VERSION in FILE."""
    date_format = ctx.config.date_format

    try:
        records = load_versions(file)
        target = next((r for r in records if r.version == version), None)
        if target is None:
            print_error(f"Version {version!r} not found in {file}")
            sys.exit(1)

        moved = move_window(target, open_, close)
        destination = output or file
        backup_path = save_versions(
            destination,
            replace_record(records, target, moved.record),
            create_backup=backup,
        )
    except FareVersionError as exc:
        print_error(f"{exc}")
        sys.exit(1)

    logger.info(
        "Moved %s: open %+d day(s), close %+d day(s), publish %+d day(s)",
        version,
        round(moved.open_shift / MS_PER_DAY),
        round(moved.close_shift / MS_PER_DAY),
        round(moved.publish_shift / MS_PER_DAY),
    )

    record = moved.record
    console = get_raw_console()
    console.print(
        f"{record.version}: valid {format_millis(record.open, date_format)} → "
        f"{format_millis(record.close, date_format)}, "
        f"published {format_millis(record.publish_date, date_format)}",
        highlight=False,
    )
    if moved.publish_date_adjusted:
        print_warning(
            "Publish date moved back to the new opening date",
            prefix="[NOTE]",
        )
    if backup_path is not None:
        logger.info("Backup written to %s", backup_path)
    print_success(f"Saved {destination}")
