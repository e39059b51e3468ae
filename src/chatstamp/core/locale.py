"""Locale formats and label providers.

Two caller-owned capabilities feed the formatter:

- a :class:`LocaleFormats` describing how weekdays, months and times of day
  are abbreviated and laid out, and
- a ``LabelProvider``: a callable mapping a label key (``"now"``,
  ``"today"``, ...) to a localized string.

Neither touches the process-wide ``locale`` module, so results do not
depend on the host's ``LC_TIME``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Mapping

from .errors import UnknownLocaleError

LabelProvider = Callable[[str], str]

# Monday first, matching date.weekday().
EN_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
EN_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


@dataclass(frozen=True)
class LocaleFormats:
    """Abbreviations and layout templates for one locale.

    ``short_time`` is a ``str.format`` pattern over ``hour``, ``hour12``,
    ``minute`` and ``ampm``. The tier templates are patterns over
    ``weekday``, ``month``, ``day``, ``year`` and ``time``.
    """

    name: str
    short_time: str = "{hour12}:{minute:02d} {ampm}"
    medium: str = "{weekday}, {time}"
    long: str = "{month} {day}, {time}"
    extra_long: str = "{month} {day}, {year}, {time}"
    weekdays: tuple[str, ...] = EN_WEEKDAYS
    months: tuple[str, ...] = EN_MONTHS
    am_pm: tuple[str, str] = ("AM", "PM")

    @property
    def language(self) -> str:
        return self.name.split("_")[0]

    def format_time(self, dt: datetime) -> str:
        """Render the time of day in the locale's short form, e.g. ``12:23 AM``."""
        return self.short_time.format(
            hour=dt.hour,
            hour12=dt.hour % 12 or 12,
            minute=dt.minute,
            ampm=self.am_pm[dt.hour >= 12],
        )

    def _fields(self, dt: datetime) -> dict:
        return {
            "weekday": self.weekdays[dt.weekday()],
            "month": self.months[dt.month - 1],
            "day": dt.day,
            "year": dt.year,
            "time": self.format_time(dt),
        }

    def format_medium(self, dt: datetime) -> str:
        return self.medium.format(**self._fields(dt))

    def format_long(self, dt: datetime) -> str:
        return self.long.format(**self._fields(dt))

    def format_extra_long(self, dt: datetime) -> str:
        return self.extra_long.format(**self._fields(dt))


EN_US = LocaleFormats(name="en_US")

EN_GB = LocaleFormats(
    name="en_GB",
    short_time="{hour:02d}:{minute:02d}",
    long="{day} {month}, {time}",
    extra_long="{day} {month} {year}, {time}",
    months=EN_MONTHS[:8] + ("Sept",) + EN_MONTHS[9:],
)

DE_DE = LocaleFormats(
    name="de_DE",
    short_time="{hour:02d}:{minute:02d}",
    long="{day}. {month}, {time}",
    extra_long="{day}. {month} {year}, {time}",
    weekdays=("Mo.", "Di.", "Mi.", "Do.", "Fr.", "Sa.", "So."),
    months=(
        "Jan.", "Feb.", "März", "Apr.", "Mai", "Juni",
        "Juli", "Aug.", "Sept.", "Okt.", "Nov.", "Dez.",
    ),
)

# Insertion order matters: a bare language resolves to its first entry.
LOCALES: dict[str, LocaleFormats] = {
    fmt.name: fmt for fmt in (EN_US, EN_GB, DE_DE)
}

LABELS: dict[str, dict[str, str]] = {
    "en": {
        "now": "Now",
        "today": "Today",
        "yesterday": "Yesterday",
        "this_week": "This week",
        "this_month": "This month",
        "older": "Older",
    },
    "de": {
        "now": "Jetzt",
        "today": "Heute",
        "yesterday": "Gestern",
        "this_week": "Diese Woche",
        "this_month": "Diesen Monat",
        "older": "Älter",
    },
}


def _normalize(name: str) -> str:
    parts = name.strip().replace("-", "_").split("_")
    if len(parts) == 1:
        return parts[0].lower()
    return f"{parts[0].lower()}_{parts[1].upper()}"


def get_locale(name: str) -> LocaleFormats:
    """Look up a built-in locale by name.

    Accepts ``en_US``, ``en-us`` and similar spellings. A bare language such
    as ``"de"`` resolves to the first registered locale for it.

    Raises:
        UnknownLocaleError: if nothing matches.
    """
    key = _normalize(name)
    if key in LOCALES:
        return LOCALES[key]
    if "_" not in key:
        for fmt in LOCALES.values():
            if fmt.language == key:
                return fmt
    raise UnknownLocaleError(
        f"Unknown locale {name!r}. Available: {', '.join(LOCALES)}"
    )


def label_provider(
    locale_name: str, overrides: Mapping[str, str] | None = None
) -> LabelProvider:
    """Build a label provider for *locale_name*'s language.

    Entries in *overrides* replace the built-in strings. Languages without
    built-in strings fall back to English.
    """
    language = _normalize(locale_name).split("_")[0]
    labels = dict(LABELS.get(language, LABELS["en"]))
    if overrides:
        labels.update(overrides)
    return labels.__getitem__
