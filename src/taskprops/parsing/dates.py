# src/taskprops/parsing/dates.py

from __future__ import annotations

"""
Date/time resolution for the `due` and `start` commands.

DateResolver tries, in order:
1. keywords (`now`, `tomorrow` and its short forms, weekday names),
2. a bare day of month (`1`..`31`),
3. a day offset (`3d`, `+10d`),
4. the free text fallback parser.

All results are timezone-aware and relative to the `now` passed in by the caller.
"""

import calendar
import logging
import re
from datetime import datetime, timedelta, tzinfo

from dateutil import parser as dtparser
from dateutil.relativedelta import FR, MO, SA, SU, TH, TU, WE, relativedelta

from ..core.ports import FallbackDateResolver

logger = logging.getLogger(__name__)

TOMORROW_KEYWORDS = frozenset({"tm", "tom", "tomorrow"})

WEEKDAY_KEYWORDS: dict[str, str] = {
    "mo": "monday",
    "mon": "monday",
    "monday": "monday",
    "tu": "tuesday",
    "tue": "tuesday",
    "tuesday": "tuesday",
    "we": "wednesday",
    "wed": "wednesday",
    "wednesday": "wednesday",
    "th": "thursday",
    "thu": "thursday",
    "thursday": "thursday",
    "fr": "friday",
    "fri": "friday",
    "friday": "friday",
    "sa": "saturday",
    "sat": "saturday",
    "saturday": "saturday",
    "su": "sunday",
    "sun": "sunday",
    "sunday": "sunday",
}

DAY_OF_MONTH_RE = re.compile(r"[0-9]+")
DAY_OFFSET_RE = re.compile(r"\+?([0-9]+)d")


class DateResolver:
    def __init__(self, fallback: FallbackDateResolver) -> None:
        self._fallback = fallback

    def resolve(self, text: str, now: datetime) -> datetime | None:
        """Return the instant `text` denotes, or None if it cannot be resolved."""
        text = text.lower()

        if text == "now":
            return now
        if text in TOMORROW_KEYWORDS:
            return self._fallback.resolve("tomorrow", now)
        weekday = WEEKDAY_KEYWORDS.get(text)
        if weekday is not None:
            return self._fallback.resolve(f"next {weekday}", now)

        try:
            if DAY_OF_MONTH_RE.fullmatch(text):
                return self._resolve_day_of_month(int(text), now)

            m = DAY_OFFSET_RE.fullmatch(text)
            if m:
                return self._resolve_day_offset(int(m.group(1)), now)
        except ValueError:
            # Digit strings past the int conversion limit.
            logger.debug("Number too long in date %r", text)
            return None

        return self._fallback.resolve(text, now)

    def _resolve_day_of_month(self, day: int, now: datetime) -> datetime | None:
        """
        Next occurrence of `day`: this month if it is today or later,
        otherwise next month. Days the target month lacks do not roll further.
        """
        if day < 1 or day > 31:
            return None

        first_of_month = self._fallback.start_of_day(now).replace(day=1)
        if day >= now.day:
            target = first_of_month
        else:
            target = first_of_month + relativedelta(months=1)

        _, days_in_month = calendar.monthrange(target.year, target.month)
        if day > days_in_month:
            logger.debug("Day %s does not exist in %04d-%02d", day, target.year, target.month)
            return None
        return target.replace(day=day)

    def _resolve_day_offset(self, days: int, now: datetime) -> datetime | None:
        try:
            shifted = now + timedelta(days=days)
        except OverflowError:
            return None
        return self._fallback.start_of_day(shifted)


_WEEKDAYS = {
    "monday": MO,
    "tuesday": TU,
    "wednesday": WE,
    "thursday": TH,
    "friday": FR,
    "saturday": SA,
    "sunday": SU,
}

_UNITS = {
    "min": "minutes",
    "mins": "minutes",
    "minute": "minutes",
    "minutes": "minutes",
    "hour": "hours",
    "hours": "hours",
    "day": "days",
    "days": "days",
    "week": "weeks",
    "weeks": "weeks",
    "month": "months",
    "months": "months",
    "year": "years",
    "years": "years",
}

_RELATIVE_WEEKDAY_RE = re.compile(r"(?:(next|last|this)\s+)?(" + "|".join(_WEEKDAYS) + r")")
_RELATIVE_OFFSET_RE = re.compile(r"([+-]?[0-9]+)\s*(" + "|".join(_UNITS) + r")")
_NEXT_UNIT_RE = re.compile(r"(next|last)\s+(" + "|".join(_UNITS) + r")")


class DateutilFallbackResolver:
    """
    Free text resolver on top of python-dateutil.

    Understands a handful of relative phrases (`today`, `tomorrow`, `yesterday`,
    `[next|last|this] <weekday>`, `+2 weeks`, `next month`) and hands anything
    else to `dateutil.parser.parse`, with missing fields taken from today 00:00.
    Naive results are placed in the resolver's timezone.

    Weekday phrases land at 00:00. `next <weekday>` is strictly after today, so
    naming today's weekday gives the same weekday one week later.
    """

    def __init__(self, tz: tzinfo) -> None:
        self._tz = tz

    def start_of_day(self, dt: datetime) -> datetime:
        return dt.replace(hour=0, minute=0, second=0, microsecond=0)

    def resolve(self, text: str, now: datetime) -> datetime | None:
        phrase = " ".join(text.lower().split())
        if not phrase:
            return None

        today = self.start_of_day(now)
        try:
            if phrase == "now":
                return now
            if phrase == "today":
                return today
            if phrase == "tomorrow":
                return today + relativedelta(days=1)
            if phrase == "yesterday":
                return today - relativedelta(days=1)

            m = _RELATIVE_WEEKDAY_RE.fullmatch(phrase)
            if m:
                return self._relative_weekday(m.group(1), _WEEKDAYS[m.group(2)], today)

            m = _RELATIVE_OFFSET_RE.fullmatch(phrase)
            if m:
                return now + relativedelta(**{_UNITS[m.group(2)]: int(m.group(1))})

            m = _NEXT_UNIT_RE.fullmatch(phrase)
            if m:
                step = 1 if m.group(1) == "next" else -1
                return now + relativedelta(**{_UNITS[m.group(2)]: step})

            parsed = dtparser.parse(phrase, default=today.replace(tzinfo=None))
            if parsed.tzinfo is None:
                return parsed.replace(tzinfo=self._tz)
            return parsed.astimezone(self._tz)
        except (dtparser.ParserError, ValueError, OverflowError):
            logger.debug("Could not parse date %r", text)
            return None

    @staticmethod
    def _relative_weekday(mode: str | None, weekday, today: datetime) -> datetime:
        if mode == "next":
            return today + relativedelta(days=1, weekday=weekday(+1))
        if mode == "last":
            return today + relativedelta(days=-1, weekday=weekday(-1))
        return today + relativedelta(weekday=weekday(+1))
