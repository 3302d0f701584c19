"""
Executable module for fareversion.

Running:
    python -m fareversion

is equivalent to:
    fareversion
"""

from __future__ import annotations

import sys


def _print_startup_error(exc: ImportError) -> None:
    """Report a broken installation on stderr."""
    try:
        from fareversion.__version__ import __version__
    except ImportError:
        __version__ = "<unknown>"

    sys.stderr.write("fareversion CLI could not be loaded.\n")
    sys.stderr.write(f"Python version     : {sys.version}\n")
    sys.stderr.write(f"fareversion version: {__version__}\n")
    sys.stderr.write("\n")
    sys.stderr.write(f"ImportError: {exc}\n")


def main() -> int:
    """Entry point for ``python -m fareversion``.

    Returns:
        Exit code returned by the CLI, or 1 if the CLI cannot be imported.
    """
    try:
        # Import lazily so CLI dependencies load only when needed
        from fareversion.cli import main as cli_main
    except ImportError as exc:
        _print_startup_error(exc)
        return 1

    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
