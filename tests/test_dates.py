# tests/test_dates.py

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from taskprops.parsing.dates import DateResolver, DateutilFallbackResolver


def _day(y: int, m: int, d: int, hh: int = 0, mm: int = 0) -> datetime:
    return datetime(y, m, d, hh, mm, tzinfo=UTC)


@pytest.fixture()
def fallback() -> DateutilFallbackResolver:
    return DateutilFallbackResolver(UTC)


@pytest.fixture()
def resolver(fallback: DateutilFallbackResolver) -> DateResolver:
    return DateResolver(fallback)


def test_now_keeps_time_of_day(resolver: DateResolver, now: datetime) -> None:
    assert resolver.resolve("now", now) == now
    assert resolver.resolve("NOW", now) == now


@pytest.mark.parametrize("text", ["tm", "tom", "tomorrow", "Tomorrow"])
def test_tomorrow_is_next_midnight(resolver: DateResolver, now: datetime, text: str) -> None:
    assert resolver.resolve(text, now) == _day(2026, 10, 20)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("tu", _day(2026, 10, 20)),
        ("wed", _day(2026, 10, 21)),
        ("friday", _day(2026, 10, 23)),
        ("sa", _day(2026, 10, 24)),
        ("Sun", _day(2026, 10, 25)),
    ],
)
def test_weekday_is_next_occurrence(
    resolver: DateResolver, now: datetime, text: str, expected: datetime
) -> None:
    assert resolver.resolve(text, now) == expected


@pytest.mark.parametrize("text", ["mo", "mon", "monday"])
def test_todays_weekday_means_one_week_ahead(resolver: DateResolver, now: datetime, text: str) -> None:
    # `now` is a Monday.
    assert resolver.resolve(text, now) == _day(2026, 10, 26)


def test_day_of_month_later_this_month(resolver: DateResolver, now: datetime) -> None:
    assert resolver.resolve("25", now) == _day(2026, 10, 25)


def test_day_of_month_today_stays_in_this_month(resolver: DateResolver, now: datetime) -> None:
    assert resolver.resolve("19", now) == _day(2026, 10, 19)


def test_day_of_month_already_passed_rolls_to_next_month(resolver: DateResolver, now: datetime) -> None:
    assert resolver.resolve("5", now) == _day(2026, 11, 5)
    assert resolver.resolve("18", now) == _day(2026, 11, 18)


def test_day_of_month_rolls_over_year_end(resolver: DateResolver) -> None:
    assert resolver.resolve("2", _day(2026, 12, 30, 9)) == _day(2027, 1, 2)


@pytest.mark.parametrize("text", ["0", "32", "100"])
def test_day_of_month_out_of_range(resolver: DateResolver, now: datetime, text: str) -> None:
    assert resolver.resolve(text, now) is None


def test_day_missing_in_current_month_fails(resolver: DateResolver) -> None:
    # November has 30 days and 31 is still ahead, so it targets November.
    assert resolver.resolve("31", _day(2026, 11, 20)) is None


def test_day_missing_in_next_month_fails(resolver: DateResolver) -> None:
    # 30 has passed in January; February 2027 has no 30th.
    assert resolver.resolve("30", _day(2027, 1, 31)) is None
    assert resolver.resolve("28", _day(2027, 1, 31)) == _day(2027, 2, 28)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("0d", _day(2026, 10, 19)),
        ("3d", _day(2026, 10, 22)),
        ("+10d", _day(2026, 10, 29)),
        ("14D", _day(2026, 11, 2)),
    ],
)
def test_day_offset_lands_at_midnight(
    resolver: DateResolver, now: datetime, text: str, expected: datetime
) -> None:
    assert resolver.resolve(text, now) == expected


def test_huge_day_offset_fails(resolver: DateResolver, now: datetime) -> None:
    assert resolver.resolve("99999999999d", now) is None


def test_falls_back_to_free_text(resolver: DateResolver, now: datetime) -> None:
    assert resolver.resolve("2026-12-24", now) == _day(2026, 12, 24)
    assert resolver.resolve("2026-12-24 15:30", now) == _day(2026, 12, 24, 15, 30)
    assert resolver.resolve("next friday", now) == _day(2026, 10, 23)
    assert resolver.resolve("+2 weeks", now) == now + timedelta(weeks=2)


def test_unparseable_text_fails(resolver: DateResolver, now: datetime) -> None:
    assert resolver.resolve("someday maybe", now) is None


def test_fallback_relative_phrases(fallback: DateutilFallbackResolver, now: datetime) -> None:
    assert fallback.resolve("today", now) == _day(2026, 10, 19)
    assert fallback.resolve("yesterday", now) == _day(2026, 10, 18)
    assert fallback.resolve("monday", now) == _day(2026, 10, 19)
    assert fallback.resolve("last monday", now) == _day(2026, 10, 12)
    assert fallback.resolve("next month", now) == datetime(2026, 11, 19, 14, 30, 15, tzinfo=UTC)
    assert fallback.resolve("3 hours", now) == now + timedelta(hours=3)
    assert fallback.resolve("   ", now) is None


def test_fallback_converts_aware_input_to_its_zone(fallback: DateutilFallbackResolver, now: datetime) -> None:
    resolved = fallback.resolve("2026-12-24 10:00:00 +02:00", now)
    assert resolved == _day(2026, 12, 24, 8)
    assert resolved is not None and resolved.utcoffset() == timedelta(0)


def test_start_of_day(fallback: DateutilFallbackResolver, now: datetime) -> None:
    assert fallback.start_of_day(now) == _day(2026, 10, 19)


@pytest.mark.parametrize("text", ["1" * 5000, "1" * 5000 + "d", "+" + "9" * 5000 + "d"])
def test_overlong_numbers_fail(resolver: DateResolver, now: datetime, text: str) -> None:
    assert resolver.resolve(text, now) is None


def test_fallback_aware_input_outside_range_fails(fallback: DateutilFallbackResolver, now: datetime) -> None:
    assert fallback.resolve("0001-01-01 00:00 +01:00", now) is None
