"""
US federal holiday rules and observed-date calculation.

Pure calendar logic: every function here is a deterministic function of the
year (or date) it is given. Nothing is cached.
"""

import calendar
from dataclasses import dataclass
from datetime import MAXYEAR, date, timedelta
from typing import FrozenSet, List, Tuple

import pendulum


def nth_weekday(year: int, month: int, weekday: int, nth: int) -> date:
    """
    Return the nth occurrence of a weekday within a month.

    Args:
        year: Calendar year
        month: Month number (1-12)
        weekday: 0=Monday ... 6=Sunday
        nth: 1 for the first occurrence, 2 for the second, ...; -1 for the last

    Raises:
        ValueError: If the month has no such occurrence
    """
    if nth == 0:
        raise ValueError("nth must be a positive occurrence or -1 for the last one")

    if nth > 0:
        first = date(year, month, 1)
        offset = (weekday - first.weekday()) % 7
        result = first + timedelta(days=offset + 7 * (nth - 1))
    else:
        last = date(year, month, calendar.monthrange(year, month)[1])
        offset = (last.weekday() - weekday) % 7
        result = last - timedelta(days=offset + 7 * (-nth - 1))

    if result.month != month:
        raise ValueError(f"{year}-{month:02d} has no occurrence {nth} of weekday {weekday}")
    return result


def shift_off_weekend(day: date) -> date:
    """Move a Saturday back to Friday and a Sunday forward to Monday."""
    if day.weekday() == pendulum.SATURDAY:
        return day - timedelta(days=1)
    if day.weekday() == pendulum.SUNDAY:
        return day + timedelta(days=1)
    return day


@dataclass(frozen=True)
class FixedDateHoliday:
    """
    A holiday pinned to a month/day, observed on the nearest weekday.
    """
    name: str
    month: int
    day: int

    def observed(self, year: int) -> date:
        """Observed date for the given year (may fall in the previous year)."""
        return shift_off_weekend(date(year, self.month, self.day))


@dataclass(frozen=True)
class WeekdayHoliday:
    """
    A holiday defined as the nth weekday of a month, e.g. third Monday of January.

    Always lands on a weekday, so it is never shifted.
    """
    name: str
    month: int
    weekday: int
    nth: int

    def observed(self, year: int) -> date:
        return nth_weekday(year, self.month, self.weekday, self.nth)


US_FEDERAL_HOLIDAYS = (
    FixedDateHoliday("New Year's Day", 1, 1),
    WeekdayHoliday("Martin Luther King Jr. Day", 1, pendulum.MONDAY, 3),
    WeekdayHoliday("Presidents' Day", 2, pendulum.MONDAY, 3),
    WeekdayHoliday("Memorial Day", 5, pendulum.MONDAY, -1),
    FixedDateHoliday("Independence Day", 7, 4),
    WeekdayHoliday("Labor Day", 9, pendulum.MONDAY, 1),
    WeekdayHoliday("Columbus Day", 10, pendulum.MONDAY, 2),
    FixedDateHoliday("Veterans Day", 11, 11),
    WeekdayHoliday("Thanksgiving Day", 11, pendulum.THURSDAY, 4),
    FixedDateHoliday("Christmas Day", 12, 25),
)


def holidays_for_year(year: int) -> List[Tuple[date, str]]:
    """
    Return the observed holidays that fall within a calendar year, sorted by date.

    A New Year's Day that lands on a Saturday is observed on December 31st
    of the previous year, so the following year's rules are consulted too.
    """
    observed: List[Tuple[date, str]] = []

    for rule_year in (year, year + 1):
        if rule_year > MAXYEAR:
            continue
        for rule in US_FEDERAL_HOLIDAYS:
            try:
                day = rule.observed(rule_year)
            except OverflowError:
                # 0001-01-01 style edges shift outside the date range
                continue
            if day.year == year:
                observed.append((day, rule.name))

    return sorted(observed)


def observed_holidays(year: int) -> FrozenSet[date]:
    """Return the set of observed holiday dates within a calendar year."""
    return frozenset(day for day, _ in holidays_for_year(year))


def holiday_name(day: date) -> str | None:
    """Name of the holiday observed on the given date, if any."""
    for observed, name in holidays_for_year(day.year):
        if observed == day:
            return name
    return None


def is_holiday(day: date) -> bool:
    """Check if a date is an observed holiday."""
    return day in observed_holidays(day.year)
