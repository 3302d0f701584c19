"""
CLI subcommands for fareversion and the Click parameter types they share.
"""

from __future__ import annotations

from typing import Any, Optional

import click

from fareversion.exceptions import InvalidInstantError
from fareversion.utils.timeconv import Millis, to_millis


class InstantParamType(click.ParamType):
    """Click parameter accepting epoch milliseconds or an ISO-8601 date/datetime."""

    name = "instant"

    def convert(
        self,
        value: Any,
        param: Optional[click.Parameter],
        ctx: Optional[click.Context],
    ) -> Millis:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return value

        text = str(value).strip()
        if text.lstrip("-").isdigit():
            return int(text)

        try:
            return to_millis(text)
        except InvalidInstantError:
            self.fail(
                f"{value!r} is neither epoch milliseconds nor an ISO-8601 date",
                param,
                ctx,
            )


INSTANT = InstantParamType()
