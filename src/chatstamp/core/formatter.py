"""TimeLabelFormatter: the timestamp operations bound to one display setup."""

from __future__ import annotations

import logging
from datetime import tzinfo
from typing import Sequence
from zoneinfo import ZoneInfo

from ..utils import timestamp as ts
from .clock import Clock, system_clock
from .config import ChatstampConfig
from .locale import EN_US, LabelProvider, LocaleFormats, get_locale, label_provider

logger = logging.getLogger(__name__)


class TimeLabelFormatter:
    """Labels, locale, zone, clock and thresholds in one place.

    Holds no mutable state. Methods taking ``now`` read the injected clock
    only when it is omitted.
    """

    def __init__(
        self,
        labels: LabelProvider | None = None,
        locale: LocaleFormats = EN_US,
        tz: tzinfo | None = None,
        clock: Clock = system_clock,
        display_gap: int = ts.DISPLAY_GAP,
        now_window: int = ts.NOW_WINDOW,
    ):
        self.labels = labels or label_provider(locale.name)
        self.locale = locale
        self.tz = tz
        self.clock = clock
        self.display_gap = display_gap
        self.now_window = now_window

    @classmethod
    def from_config(
        cls, config: ChatstampConfig, clock: Clock = system_clock
    ) -> TimeLabelFormatter:
        """Build a formatter from a loaded config.

        Raises:
            UnknownLocaleError: if ``config.locale`` is not a built-in locale.
            zoneinfo.ZoneInfoNotFoundError: if ``config.timezone`` is not an IANA key.
        """
        locale = get_locale(config.locale)
        tz = ZoneInfo(config.timezone) if config.timezone else None
        logger.debug(
            "Formatter for locale=%s tz=%s gap=%dm window=%ds",
            locale.name, config.timezone or "local",
            config.gap_minutes, config.now_window_seconds,
        )
        return cls(
            labels=label_provider(locale.name, config.labels),
            locale=locale,
            tz=tz,
            clock=clock,
            display_gap=config.gap_minutes * ts.MINUTE,
            now_window=config.now_window_seconds * ts.SECOND,
        )

    def _now(self, now: int | None) -> int:
        return self.clock() if now is None else now

    def should_display_timestamp(self, previous: int, next_timestamp: int) -> bool:
        return ts.should_display_timestamp(previous, next_timestamp, self.display_gap)

    def label_positions(self, timestamps: Sequence[int]) -> list[int]:
        return ts.label_positions(timestamps, self.display_gap)

    def classify(self, timestamp: int, now: int | None = None) -> ts.Tier:
        return ts.classify_timestamp(
            timestamp, self._now(now), tz=self.tz, now_window=self.now_window
        )

    def format_timestamp(self, timestamp: int, now: int | None = None) -> str:
        return ts.format_timestamp(
            self.labels,
            timestamp,
            self._now(now),
            locale=self.locale,
            tz=self.tz,
            now_window=self.now_window,
        )

    def is_today(self, timestamp: int, now: int | None = None) -> bool:
        return ts.is_today(timestamp, self._now(now), self.tz)

    def is_yesterday(self, timestamp: int, now: int | None = None) -> bool:
        return ts.is_yesterday(timestamp, self._now(now), self.tz)

    def section_label(self, timestamp: int, now: int | None = None) -> str:
        return ts.section_label(self.labels, timestamp, self._now(now), self.tz)
