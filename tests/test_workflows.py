"""Tests for the command workflows."""

from datetime import date
from pathlib import Path
from unittest.mock import MagicMock

import click
import pytest

from cal2.adapters.file_cache import FileHolidayStore
from cal2.adapters.holiday_api import HolidayApiAdapter
from cal2.config import Config
from cal2.core.holidays import ArgentinaDatos, HolidayEntry, HolidayKind, OpenHolidays
from cal2.core.render import MONTH_WIDTH, DisplayMode
from cal2.errors import CacheError, ConfigError, HttpError, InvalidDateError, JsonError
from cal2.workflows import (
    add_custom_holiday,
    delete_holiday,
    get_holidays,
    get_store,
    show_calendar,
    show_holidays,
)


class FakeStore:
    """In-memory HolidayStore keyed by path."""

    def __init__(self, files=None):
        self.files = dict(files or {})
        self.saved = []

    def filename(self, year, provider):
        return Path(f"hm-{year}")

    def load(self, path):
        if path not in self.files:
            return None
        return dict(self.files[path])

    def save(self, path, holidays):
        self.saved.append(path)
        self.files[path] = dict(holidays)


@pytest.fixture
def config(tmp_path):
    return Config(cache_dir=str(tmp_path))


@pytest.fixture
def source():
    source = MagicMock()
    source.fetch.return_value = {}
    return source


class TestGetStore:
    def test_uses_configured_dir(self, tmp_path):
        store = get_store(Config(cache_dir=str(tmp_path)))
        assert store.cache_dir == tmp_path


class TestGetHolidays:
    def test_cache_hit_skips_fetch(self, source):
        cached = {(2, 1): HolidayEntry.official("Test cached holiday")}
        store = FakeStore({Path("hm-2035"): cached})

        result = get_holidays(2035, ArgentinaDatos(), store, source)

        assert result == cached
        source.fetch.assert_not_called()
        assert store.saved == []

    def test_cache_miss_fetches_and_saves(self, source):
        fetched = {(1, 1): HolidayEntry.official("New Year's Day")}
        source.fetch.return_value = fetched
        store = FakeStore()

        result = get_holidays(2024, OpenHolidays(country_code="US"), store, source)

        assert result == fetched
        source.fetch.assert_called_once_with(2024, OpenHolidays(country_code="US"))
        assert store.files[Path("hm-2024")] == fetched

    def test_fetch_error_is_not_cached(self, source):
        source.fetch.side_effect = HttpError("down")
        store = FakeStore()

        with pytest.raises(HttpError):
            get_holidays(2024, ArgentinaDatos(), store, source)
        assert store.saved == []

    def test_corrupt_cache_propagates(self, tmp_path, source):
        store = FileHolidayStore(tmp_path)
        store.filename(2024, ArgentinaDatos()).write_bytes(b"garbage")

        with pytest.raises(CacheError):
            get_holidays(2024, ArgentinaDatos(), store, source)
        source.fetch.assert_not_called()

    def test_malformed_provider_data_is_not_cached(self, tmp_path):
        session = MagicMock()
        session.get.return_value.json.return_value = [
            {"startDate": "2024-01-01", "name": [{"language": "EN", "text": None}]},
        ]
        store = FileHolidayStore(tmp_path)
        provider = OpenHolidays(country_code="DE")

        with pytest.raises(JsonError):
            get_holidays(2024, provider, store, HolidayApiAdapter(session=session))
        assert not store.filename(2024, provider).exists()

    def test_real_store_round_trip(self, tmp_path, source):
        store = FileHolidayStore(tmp_path)
        hm = {(4, 3): HolidayEntry.official("Cache Test")}
        store.save(store.filename(2042, ArgentinaDatos()), hm)

        assert get_holidays(2042, ArgentinaDatos(), store, source) == hm
        source.fetch.assert_not_called()


class TestShowCalendar:
    def test_month_mode_header(self, config, source):
        source.fetch.return_value = {(1, 1): HolidayEntry.official("New Year's Day")}
        output = show_calendar(
            config, ArgentinaDatos(), DisplayMode.MONTH, date(1970, 1, 1),
            store=FakeStore(), source=source,
        )
        assert "January 1970" in output

    def test_quarter_mode_includes_neighbours(self, config, source):
        output = show_calendar(
            config, ArgentinaDatos(), DisplayMode.QUARTER, date(1970, 1, 1),
            store=FakeStore(), source=source,
        )
        assert "December 1969" in output
        assert "February 1970" in output

    def test_year_mode_includes_all_months(self, config, source):
        output = show_calendar(
            config, ArgentinaDatos(), DisplayMode.YEAR, date(1970, 6, 1),
            store=FakeStore(), source=source,
        )
        assert "January 1970" in output and "December 1970" in output

    def test_today_is_highlighted(self, config, source):
        output = show_calendar(
            config, ArgentinaDatos(), DisplayMode.MONTH, date(2024, 5, 15),
            store=FakeStore(), source=source,
        )
        assert click.style("15", reverse=True) in output
        assert all(len(click.unstyle(line)) <= MONTH_WIDTH for line in output.splitlines())

    def test_fetches_current_year(self, config, source):
        show_calendar(
            config, ArgentinaDatos(), DisplayMode.QUARTER, date(1970, 1, 1),
            store=FakeStore(), source=source,
        )
        source.fetch.assert_called_once_with(1970, ArgentinaDatos())


class TestShowHolidays:
    def test_empty(self, config, source):
        output = show_holidays(config, ArgentinaDatos(), "table", date(2024, 6, 1), FakeStore(), source)
        assert output == "No holidays found"

    def test_sorted_with_kind(self, config, source):
        source.fetch.return_value = {
            (24, 12): HolidayEntry.custom("Family dinner"),
            (1, 1): HolidayEntry.official("New Year's Day"),
        }
        output = show_holidays(config, ArgentinaDatos(), "table", date(2024, 6, 1), FakeStore(), source)
        assert output.startswith("2024-01-01")
        assert "New Year's Day [official]" in output
        assert "Family dinner [custom]" in output

    def test_unknown_format(self, config, source):
        with pytest.raises(ConfigError, match="unknown list format"):
            show_holidays(config, ArgentinaDatos(), "xml", date(2024, 6, 1), FakeStore(), source)


class TestAddCustomHoliday:
    def test_adds_to_empty_map(self, config, source):
        store = FakeStore({Path("hm-2024"): {}})

        assert add_custom_holiday(config, ArgentinaDatos(), 24, 12, date(2024, 5, 1), store, source) == "OK"

        entry = store.files[Path("hm-2024")][(24, 12)]
        assert entry.kind == HolidayKind.CUSTOM
        assert "Custom holiday" in entry.name

    def test_does_not_override_official(self, config, source):
        store = FakeStore({Path("hm-2024"): {(1, 5): HolidayEntry.official("Labour Day")}})

        add_custom_holiday(config, ArgentinaDatos(), 1, 5, date(2024, 5, 1), store, source)

        entry = store.files[Path("hm-2024")][(1, 5)]
        assert entry.kind == HolidayKind.OFFICIAL
        assert entry.name == "Labour Day"

    def test_fetches_official_holidays_on_miss(self, config, source):
        source.fetch.return_value = {(1, 1): HolidayEntry.official("New Year's Day")}
        store = FakeStore()

        add_custom_holiday(config, ArgentinaDatos(), 24, 12, date(2024, 5, 1), store, source)

        assert set(store.files[Path("hm-2024")]) == {(1, 1), (24, 12)}

    @pytest.mark.parametrize("day,month", [(1, 13), (0, 1), (32, 1)])
    def test_rejects_invalid_day_month_before_io(self, config, source, day, month):
        store = MagicMock()
        with pytest.raises(InvalidDateError):
            add_custom_holiday(config, ArgentinaDatos(), day, month, date(2024, 5, 1), store, source)
        store.load.assert_not_called()


class TestDeleteHoliday:
    def test_removes_entry(self, config, source):
        store = FakeStore({Path("hm-2024"): {
            (1, 1): HolidayEntry.official("New Year's Day"),
            (24, 12): HolidayEntry.custom("Family dinner"),
        }})

        assert delete_holiday(config, ArgentinaDatos(), 24, 12, date(2024, 5, 1), store, source) == "OK"

        assert set(store.files[Path("hm-2024")]) == {(1, 1)}

    def test_absent_is_noop(self, config, source):
        store = FakeStore({Path("hm-2024"): {(1, 1): HolidayEntry.official("New Year's Day")}})

        assert delete_holiday(config, ArgentinaDatos(), 2, 2, date(2024, 5, 1), store, source) == "OK"

        assert set(store.files[Path("hm-2024")]) == {(1, 1)}
