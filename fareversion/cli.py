"""
Command-line interface for fareversion.

Provides the ``fareversion`` entry point, global options, configuration
loading, and command registration.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

import click

from fareversion.config import load_config
from fareversion.__version__ import __version__
from fareversion.context import FareVersionContext
from fareversion.exceptions import ConfigError, FareVersionError
from fareversion.utils.logger import get_logger, level_for_verbosity, setup_logging
from fareversion.utils.console import print_error, print_warning, reconfigure_console

logger = get_logger("cli")

EXIT_INTERRUPTED = 130


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Configuration file (default: fareversion.toml or pyproject.toml).",
    envvar="FAREVERSION_CONFIG",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Log more detail: -v for progress, -vv for debug output.",
)
@click.option(
    "--color/--no-color",
    default=True,
    help="Colorize tables and log messages.",
    envvar="FAREVERSION_COLOR",
)
@click.version_option(
    version=__version__,
    prog_name="fareversion",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """fareversion: find the fare version that governs a travel date.

    \b
    Commands:
      fareversion resolve          Resolve the version for a purchase/travel pair
      fareversion generate         Generate sample version data
      fareversion move             Move a version's validity window

    \b
    Examples:
      fareversion resolve versions.json -p 2025-11-01 -t 2025-12-24
      fareversion generate --seed 42 -o versions.json
      fareversion -v move versions.json v2 --open 2025-10-01 --close 2026-01-31

    Use ``fareversion COMMAND --help`` for command-specific options.
    """
    _apply_color_choice(color)
    setup_logging(level=level_for_verbosity(verbose), verbose=verbose >= 2)

    try:
        settings = load_config(config)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    ctx.obj = FareVersionContext(
        config_path=config or settings.source_path,
        verbose=verbose,
        color=color,
        config=settings,
    )
    logger.debug(
        "fareversion %s started (config=%s, verbose=%d, color=%s)",
        __version__,
        ctx.obj.config_path,
        verbose,
        color,
    )


def _apply_color_choice(color: bool) -> None:
    """Mirror ``--color/--no-color`` into ``NO_COLOR`` and rebuild the console.

    Both the log formatter and the Rich console read ``NO_COLOR``, so this
    runs before either is set up.
    """
    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reconfigure_console()


def _register_commands() -> None:
    from fareversion.commands.generate import generate
    from fareversion.commands.move import move
    from fareversion.commands.resolve import resolve

    for command in (resolve, generate, move):
        cli.add_command(command)


_register_commands()


def _cancelled() -> int:
    print_warning("\nOperation cancelled by user")
    return EXIT_INTERRUPTED


def main() -> int:
    """Run the CLI and translate its outcome into a process exit code.

    Returns:
        ``0`` on success, ``1`` when no version resolved or on an
        application error, ``2`` for Click usage errors, and ``130`` when
        interrupted.
    """
    try:
        result = cli(standalone_mode=False)
    except (click.Abort, KeyboardInterrupt):
        return _cancelled()
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except FareVersionError as exc:
        print_error(str(exc))
        logger.debug("Error details: %s", exc.details or "<none>", exc_info=True)
        return 1
    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception in CLI")
        return 1

    return result if isinstance(result, int) else 0


if __name__ == "__main__":
    sys.exit(main())
