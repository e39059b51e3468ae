"""Timestamp argument parsing for the CLI."""

from __future__ import annotations

from datetime import datetime, tzinfo

import click


class TimestampParamType(click.ParamType):
    """Epoch milliseconds, or an ISO 8601 string.

    A bare run of digits is always read as epoch milliseconds, so ISO basic
    dates such as ``20160713`` must be written ``2016-07-13``. Naive ISO
    strings are left as datetimes so the command can pin them to the
    configured zone once it is known.
    """

    name = "timestamp"

    def convert(self, value, param, ctx):
        if isinstance(value, datetime):
            return value
        if isinstance(value, int):
            millis = value
        else:
            text = str(value).strip()
            if not text.lstrip("-").isdigit():
                try:
                    return datetime.fromisoformat(text.replace("Z", "+00:00"))
                except ValueError:
                    self.fail(f"{value!r} is neither epoch milliseconds nor ISO 8601", param, ctx)
            millis = int(text)
        if millis < 0:
            self.fail(f"{value!r} is before the epoch", param, ctx)
        return millis


TIMESTAMP = TimestampParamType()


def to_millis(value: int | datetime, tz: tzinfo | None = None) -> int:
    """Epoch milliseconds for a parsed TIMESTAMP argument."""
    if isinstance(value, int):
        return value
    if value.tzinfo is None:
        # astimezone() on a naive datetime assumes the system zone
        value = value.replace(tzinfo=tz) if tz else value.astimezone()
    return round(value.timestamp() * 1000)
