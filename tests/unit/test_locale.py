"""Tests for locale formats and label providers."""

from datetime import datetime

import pytest

from chatstamp.core.errors import UnknownLocaleError
from chatstamp.core.locale import (
    DE_DE,
    EN_GB,
    EN_US,
    LOCALES,
    get_locale,
    label_provider,
)


class TestFormatTime:
    def test_twelve_hour(self):
        assert EN_US.format_time(datetime(2016, 7, 13, 0, 5)) == "12:05 AM"
        assert EN_US.format_time(datetime(2016, 7, 13, 12, 5)) == "12:05 PM"
        assert EN_US.format_time(datetime(2016, 7, 13, 13, 7)) == "1:07 PM"

    def test_twenty_four_hour(self):
        assert EN_GB.format_time(datetime(2016, 7, 13, 0, 5)) == "00:05"
        assert DE_DE.format_time(datetime(2016, 7, 13, 13, 7)) == "13:07"


class TestTemplates:
    def test_en_us(self):
        dt = datetime(2016, 9, 5, 10, 0)
        assert EN_US.format_medium(dt) == "Mon, 10:00 AM"
        assert EN_US.format_long(dt) == "Sep 5, 10:00 AM"
        assert EN_US.format_extra_long(dt) == "Sep 5, 2016, 10:00 AM"

    def test_en_gb_uses_sept(self):
        assert EN_GB.format_long(datetime(2016, 9, 5, 10, 0)) == "5 Sept, 10:00"

    def test_de_de(self):
        dt = datetime(2016, 3, 1, 9, 30)
        assert DE_DE.format_medium(dt) == "Di., 09:30"
        assert DE_DE.format_extra_long(dt) == "1. März 2016, 09:30"

    def test_every_locale_has_full_name_tables(self):
        for fmt in LOCALES.values():
            assert len(fmt.weekdays) == 7
            assert len(fmt.months) == 12


class TestGetLocale:
    @pytest.mark.parametrize("name", ["en_US", "en-US", "en-us", "EN_us", " en_US "])
    def test_spellings(self, name):
        assert get_locale(name) is EN_US

    def test_bare_language(self):
        assert get_locale("en") is EN_US
        assert get_locale("de") is DE_DE

    @pytest.mark.parametrize("name", ["fr_FR", "xx", "en_AU"])
    def test_unknown(self, name):
        with pytest.raises(UnknownLocaleError):
            get_locale(name)


class TestLabelProvider:
    def test_english(self):
        labels = label_provider("en_US")
        assert labels("now") == "Now"
        assert labels("this_week") == "This week"

    def test_german(self):
        assert label_provider("de_DE")("now") == "Jetzt"

    def test_unknown_language_falls_back_to_english(self):
        assert label_provider("fr_FR")("now") == "Now"

    def test_overrides(self):
        labels = label_provider("en_GB", {"now": "Just now"})
        assert labels("now") == "Just now"
        assert labels("today") == "Today"

    def test_overrides_do_not_leak(self):
        label_provider("en_US", {"now": "Just now"})
        assert label_provider("en_US")("now") == "Now"

    def test_unknown_key(self):
        with pytest.raises(KeyError):
            label_provider("en_US")("tomorrow")
