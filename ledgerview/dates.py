"""
Date helpers for month grids, calendar layouts and chart labels.
"""

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator, List

from .config import get_config


MONTH_FORMAT = "%b-%Y"   # Jan-2024, x axis of monthly timelines
DAY_FORMAT = "%d-%b"     # 05-Jan, x axis of daily timelines


def now() -> date:
    """Today, unless LEDGERVIEW_NOW pins it"""
    pinned = get_config().now
    if pinned:
        return date.fromisoformat(pinned)
    return date.today()


def start_of_month(d: date) -> date:
    return d.replace(day=1)


def end_of_month(d: date) -> date:
    return d.replace(day=calendar.monthrange(d.year, d.month)[1])


def add_months(d: date, months: int) -> date:
    index = d.year * 12 + (d.month - 1) + months
    year, month = divmod(index, 12)
    day = min(d.day, calendar.monthrange(year, month + 1)[1])
    return date(year, month + 1, day)


def for_each_month(start: date, end: date) -> Iterator[date]:
    """First day of every month from start's month to end's month, inclusive"""
    current = start_of_month(start)
    last = start_of_month(end)
    while current <= last:
        yield current
        current = add_months(current, 1)


def parse_month(month: str) -> date:
    """YYYY-MM -> first day of that month"""
    try:
        year, mon = month.split("-")
        return date(int(year), int(mon), 1)
    except ValueError:
        raise ValueError(f"Invalid month '{month}', expected YYYY-MM")


def month_key(d: date) -> str:
    return d.strftime("%Y-%m")


def month_label(d: date) -> str:
    return d.strftime(MONTH_FORMAT)


def day_label(d: date) -> str:
    return d.strftime(DAY_FORMAT)


@dataclass
class MonthDays:
    """Calendar grid for a month, padded to whole Sunday-first weeks"""
    days: List[date]
    month_start: date
    month_end: date

    def in_month(self, d: date) -> bool:
        return self.month_start <= d <= self.month_end


def month_days(month: str) -> MonthDays:
    month_start = parse_month(month)
    month_end = end_of_month(month_start)
    # date.weekday(): Monday is 0, the grid starts on Sunday
    grid_start = month_start - timedelta(days=(month_start.weekday() + 1) % 7)
    grid_end = month_end + timedelta(days=(5 - month_end.weekday()) % 7)
    days = [grid_start + timedelta(days=i) for i in range((grid_end - grid_start).days + 1)]
    return MonthDays(days=days, month_start=month_start, month_end=month_end)


def financial_year(start_date: date, end_date: date) -> str:
    """Label of a yearly card, e.g. '2023 - 24'"""
    return f"{start_date.strftime('%Y')} - {end_date.strftime('%y')}"
