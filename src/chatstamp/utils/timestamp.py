"""Human-friendly timestamp labels for conversation threads.

All timestamps are epoch milliseconds. Calendar checks (today, yesterday,
how many days ago) run on local dates in *tz*, or in the system zone when
*tz* is None, so they count midnights rather than elapsed 24-hour spans.
"""

from __future__ import annotations

from datetime import datetime, tzinfo
from enum import Enum
from typing import Sequence

from ..core.errors import InvalidOrderError
from ..core.locale import EN_US, LabelProvider, LocaleFormats

SECOND = 1000
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE
DAY = 24 * HOUR

# Minimum gap before a new timestamp is worth showing again in a thread.
DISPLAY_GAP = 15 * MINUTE
# Anything closer than this to "now" (either side) renders as "Now".
NOW_WINDOW = MINUTE

MEDIUM_DAYS = 7
EXTRA_LONG_DAYS = 365


class Tier(Enum):
    NOW = "now"
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"
    EXTRA_LONG = "extra_long"


class Section(Enum):
    """Conversation-list grouping buckets. Values double as label keys."""

    TODAY = "today"
    YESTERDAY = "yesterday"
    THIS_WEEK = "this_week"
    THIS_MONTH = "this_month"
    OLDER = "older"


def to_local(timestamp: int, tz: tzinfo | None = None) -> datetime:
    """Convert epoch milliseconds to a datetime in *tz* (system zone if None)."""
    seconds, millis = divmod(timestamp, SECOND)
    return datetime.fromtimestamp(seconds, tz).replace(microsecond=millis * 1000)


def calendar_days_between(timestamp: int, now: int, tz: tzinfo | None = None) -> int:
    """Number of midnights between *timestamp* and *now*.

    Positive when *timestamp* falls on an earlier day, negative for later days.
    """
    return (to_local(now, tz).date() - to_local(timestamp, tz).date()).days


def is_today(timestamp: int, now: int, tz: tzinfo | None = None) -> bool:
    return calendar_days_between(timestamp, now, tz) == 0


def is_yesterday(timestamp: int, now: int, tz: tzinfo | None = None) -> bool:
    return calendar_days_between(timestamp, now, tz) == 1


def should_display_timestamp(
    previous: int, next_timestamp: int, gap: int = DISPLAY_GAP
) -> bool:
    """Decide whether *next_timestamp* earns its own label in a thread.

    Args:
        previous: The last timestamp shown in the thread.
        next_timestamp: The candidate timestamp.
        gap: Minimum gap in milliseconds (default 15 minutes).

    Raises:
        InvalidOrderError: if *next_timestamp* is earlier than *previous*.
    """
    if next_timestamp < previous:
        raise InvalidOrderError(previous, next_timestamp)
    return next_timestamp - previous >= gap


def label_positions(timestamps: Sequence[int], gap: int = DISPLAY_GAP) -> list[int]:
    """Indexes of the messages in a thread that should show a timestamp.

    The first message always does. Each later one is compared against the
    last timestamp actually shown, not its immediate predecessor, though
    every step must still be in chronological order.
    """
    positions: list[int] = []
    shown = None
    for index, timestamp in enumerate(timestamps):
        if index > 0 and timestamp < timestamps[index - 1]:
            raise InvalidOrderError(timestamps[index - 1], timestamp)
        if shown is None or should_display_timestamp(shown, timestamp, gap):
            positions.append(index)
            shown = timestamp
    return positions


def classify_timestamp(
    timestamp: int,
    now: int,
    *,
    tz: tzinfo | None = None,
    now_window: int = NOW_WINDOW,
) -> Tier:
    """Pick the formatting tier for *timestamp* relative to *now*."""
    if abs(now - timestamp) < now_window:
        return Tier.NOW

    days = calendar_days_between(timestamp, now, tz)
    if days == 0:
        return Tier.SHORT
    if 0 < days < MEDIUM_DAYS:
        return Tier.MEDIUM
    # Later days skip MEDIUM: a bare weekday would read as the past.
    if abs(days) < EXTRA_LONG_DAYS:
        return Tier.LONG
    return Tier.EXTRA_LONG


def format_timestamp(
    labels: LabelProvider,
    timestamp: int,
    now: int,
    *,
    locale: LocaleFormats = EN_US,
    tz: tzinfo | None = None,
    now_window: int = NOW_WINDOW,
) -> str:
    """Render a thread label for *timestamp* as seen at *now*.

    Examples (en_US, now = Wed Jul 13 2016 08:23):
        "Now"                   (within a minute)
        "12:23 AM"              (earlier today)
        "Sun, 12:23 AM"         (within the last 6 days)
        "Jul 5, 12:23 AM"       (within a year)
        "Jun 9, 2015, 8:23 AM"  (a year or more away)

    Args:
        labels: Label provider; only the ``"now"`` key is used here.
        timestamp: Epoch milliseconds to render.
        now: Reference time in epoch milliseconds.
        locale: Abbreviations and layout for the rendered string.
        tz: Zone for calendar checks and rendering (system zone if None).
        now_window: Width of the "Now" tier in milliseconds.
    """
    tier = classify_timestamp(timestamp, now, tz=tz, now_window=now_window)
    if tier is Tier.NOW:
        return labels("now")

    local = to_local(timestamp, tz)
    if tier is Tier.SHORT:
        return locale.format_time(local)
    if tier is Tier.MEDIUM:
        return locale.format_medium(local)
    if tier is Tier.LONG:
        return locale.format_long(local)
    return locale.format_extra_long(local)


def section_for(timestamp: int, now: int, tz: tzinfo | None = None) -> Section:
    """Bucket a conversation's last activity for the conversation list."""
    days = calendar_days_between(timestamp, now, tz)
    if days <= 0:
        return Section.TODAY
    if days == 1:
        return Section.YESTERDAY
    if days < MEDIUM_DAYS:
        return Section.THIS_WEEK
    if days <= 30:
        return Section.THIS_MONTH
    return Section.OLDER


def section_label(
    labels: LabelProvider, timestamp: int, now: int, tz: tzinfo | None = None
) -> str:
    return labels(section_for(timestamp, now, tz).value)
