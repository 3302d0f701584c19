"""
Per-invocation state shared by fareversion commands.

The group callback in :mod:`fareversion.cli` builds one
:class:`FareVersionContext` from the global options and stores it on the
Click context; commands receive it through :data:`pass_context`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from fareversion.config import FareVersionConfig


class FareVersionContext:
    """Global options and configuration for one CLI invocation.

    Attributes:
        config_path: Configuration file in effect, if any.
        verbose: ``-v`` count (0=WARNING, 1=INFO, 2+=DEBUG).
        color: Whether colored terminal output is enabled.
        config: Loaded configuration, or the defaults.
    """

    __slots__ = ("config_path", "verbose", "color", "config")

    def __init__(
        self,
        *,
        config_path: Optional[Path] = None,
        verbose: int = 0,
        color: bool = True,
        config: Optional[FareVersionConfig] = None,
    ) -> None:
        self.config_path = config_path
        self.verbose = verbose
        self.color = color
        self.config = config if config is not None else FareVersionConfig()


#: Injects the :class:`FareVersionContext`, creating a default one if absent.
pass_context = click.make_pass_decorator(FareVersionContext, ensure=True)
