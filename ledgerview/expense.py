"""
Expense Charts Module

Prepares the expense views:
- monthly timeline stacked per category, with a yearly average trend line,
  group filtering and a date range
- calendar heatmap of a single month
- per-category breakdown bars of a single month

Expense postings are positive amounts in the ledger.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from .accounts import rest_name, second_name
from .colors import COLORS, ColorScale, generate_color_scheme, with_alpha
from .config import get_config
from .currency import format_currency, format_currency_crude, format_fixed_width_float
from .dates import MONTH_FORMAT, for_each_month, month_days, month_key
from .models import Legend, Posting
from .timeline import BarSeries, Timeline, resolve_selection, sum_by_group, unique_sorted
from .tooltip import AMOUNT, CLIPPED, tooltip, truncation_row


ZERO = Decimal('0')

ALPHA_RANGE = (0.3, 1.0)


def expense_group(posting: Posting) -> str:
    return second_name(posting.account)


@dataclass
class CategoryTotal:
    category: str
    postings: List[Posting] = field(default_factory=list)
    total: Decimal = ZERO


def by_expense_group(postings: Iterable[Posting]) -> Dict[str, CategoryTotal]:
    categories: Dict[str, CategoryTotal] = {}
    for posting in postings:
        group = expense_group(posting)
        if group not in categories:
            categories[group] = CategoryTotal(category=group)
        categories[group].postings.append(posting)
        categories[group].total += posting.amount
    return categories


def pie_data(postings: Iterable[Posting]) -> List[CategoryTotal]:
    """Category slices of a donut, largest first"""
    return sorted(by_expense_group(postings).values(), key=lambda c: c.total, reverse=True)


def color_scale(postings: Iterable[Posting]) -> ColorScale:
    return generate_color_scheme(unique_sorted(expense_group(p) for p in postings))


DateRange = Tuple[date, date]


def create_expense_tooltip_content(postings: List[Posting], allowed_groups: Iterable[str],
                                   max_entries: int = None) -> str:
    """Positive expenses of the allowed groups, aggregated per category"""
    if max_entries is None:
        max_entries = get_config().expense_tooltip_entries

    allowed = set(allowed_groups)
    visible = [p for p in postings if p.amount > 0 and expense_group(p) in allowed]
    totals = sorted(sum_by_group(visible, expense_group).items(), key=lambda kv: kv[1], reverse=True)
    grand_total = sum((total for _, total in totals), ZERO)

    rows = [[category, (format_currency(total), AMOUNT)] for category, total in totals[:max_entries]]
    if len(totals) > max_entries:
        rows.append(truncation_row(len(totals) - max_entries))

    header = visible[0].date.strftime("%b %Y") if visible else ""
    return tooltip(rows, total=format_currency(grand_total), header=header)


def yearly_trend(postings: List[Posting], groups: List[str]) -> Dict[int, Dict[str, Decimal]]:
    """
    Average monthly spend per group for each year. The first and last years
    only count the months that have data.
    """
    start = min(p.date for p in postings)
    end = max(p.date for p in postings)

    by_year: Dict[int, List[Posting]] = defaultdict(list)
    for posting in postings:
        by_year[posting.date.year].append(posting)

    trend = {}
    for year, year_postings in by_year.items():
        months = 12
        if year == start.year:
            months -= start.month - 1
        if year == end.year:
            months -= 12 - end.month

        averages = {group: ZERO for group in groups}
        for group, total in sum_by_group(year_postings, expense_group).items():
            averages[group] = total / months
        trend[year] = averages

    return trend


def monthly_expenses_timeline(postings: List[Posting],
                              allowed_groups: Optional[Iterable[str]] = None,
                              date_range: Optional[DateRange] = None) -> Timeline:
    """
    Stacked monthly expenses. `date_range` limits the months shown, both
    ends inclusive; `allowed_groups` limits the stacked categories.
    """
    if not postings:
        return Timeline()

    groups = unique_sorted(expense_group(p) for p in postings)
    selection = resolve_selection(groups, allowed_groups)
    z = generate_color_scheme(groups)

    start = min(p.date for p in postings)
    end = max(p.date for p in postings)

    by_month: Dict[str, List[Posting]] = defaultdict(list)
    for posting in postings:
        by_month[month_key(posting.date)].append(posting)

    months = list(for_each_month(start, end))
    if date_range is not None:
        range_from, range_to = date_range
        months = [m for m in months if range_from <= m <= range_to]

    trend_by_year = yearly_trend(postings, groups)
    month_postings = [by_month.get(month_key(m), []) for m in months]
    values_by_month = [sum_by_group(ps, expense_group) for ps in month_postings]
    hover = [create_expense_tooltip_content(ps, selection) for ps in month_postings]

    series = [
        BarSeries(
            key=group,
            color=z(group),
            values=[values.get(group, ZERO) for values in values_by_month],
            hover=hover,
        )
        for group in selection
    ]

    trend = [
        sum((trend_by_year[m.year][g] for g in selection if m.year in trend_by_year), ZERO)
        for m in months
    ]

    legends = [
        Legend(label=group, color=z(group), group=group, selected=group in selection)
        for group in groups
    ]

    return Timeline(
        labels=[m.strftime(MONTH_FORMAT) for m in months],
        series=series,
        legends=legends,
        trend=trend,
        trend_color=COLORS["expenses"],
        customdata=[month_key(m) for m in months],
    )


@dataclass
class CalendarDay:
    date: date
    visible: bool
    postings: List[Posting]
    total: Decimal
    alpha: float
    color: str
    label: str
    hover: Optional[str]
    slices: List[CategoryTotal]


def _alpha_scale(totals: List[Decimal]):
    low, high = ALPHA_RANGE
    if not totals:
        return lambda value: high
    lo, hi = min(totals), max(totals)
    if lo == hi:
        return lambda value: (low + high) / 2
    return lambda value: low + float((value - lo) / (hi - lo)) * (high - low)


def _day_tooltip(postings: List[Posting]) -> Optional[str]:
    if not postings:
        return None
    total = sum((p.amount for p in postings), ZERO)
    rows = [
        [rest_name(p.account), (p.payee, CLIPPED), (format_currency(p.amount), AMOUNT)]
        for p in postings
    ]
    return tooltip(rows, total=format_currency(total), header=postings[0].date.strftime("%d %b %Y"))


def calendar_data(month: str, postings: List[Posting],
                  groups: Optional[Iterable[str]] = None) -> List[CalendarDay]:
    """
    One entry per cell of the month grid (whole weeks). Cells outside the
    month are marked invisible. Only postings of `groups` are counted.
    """
    grid = month_days(month)
    allowed = set(groups) if groups is not None else {expense_group(p) for p in postings}

    by_day: Dict[date, List[Posting]] = defaultdict(list)
    for posting in postings:
        if expense_group(posting) in allowed:
            by_day[posting.date].append(posting)

    totals = {d: sum((p.amount for p in by_day.get(d, [])), ZERO) for d in grid.days}
    alpha = _alpha_scale(list(totals.values()))

    days = []
    for d in grid.days:
        day_postings = by_day.get(d, [])
        total = totals[d]
        a = alpha(total)
        days.append(CalendarDay(
            date=d,
            visible=grid.in_month(d),
            postings=day_postings,
            total=total,
            alpha=a,
            color=with_alpha(COLORS["loss_text"], a),
            label=format_currency_crude(total) if total > 0 else "",
            hover=_day_tooltip(day_postings),
            slices=pie_data(day_postings),
        ))
    return days


def current_expenses_breakdown(postings: List[Posting], z: ColorScale = None) -> Timeline:
    """Horizontal bars per category for one month, smallest at the bottom"""
    if not postings:
        return Timeline(orientation="h")

    z = z or color_scale(postings)
    categories = sorted(by_expense_group(postings).values(), key=lambda c: c.total)
    grand_total = sum((c.total for c in categories), ZERO)

    def right_label(category: CategoryTotal) -> str:
        share = category.total / grand_total * 100 if grand_total else ZERO
        return f"{format_currency(category.total)} {format_fixed_width_float(share, 6)}%"

    def hover(category: CategoryTotal) -> str:
        rows = [
            [p.date.strftime("%d %b %Y"), (p.payee, CLIPPED), (format_currency(p.amount), AMOUNT)]
            for p in category.postings
        ]
        header = f"{category.postings[0].date.strftime('%b %Y')} {category.category}"
        return tooltip(rows, total=format_currency(category.total), header=header)

    series = [
        BarSeries(
            key="expenses",
            color=COLORS["expenses"],
            values=[c.total for c in categories],
            hover=[hover(c) for c in categories],
            text=[right_label(c) for c in categories],
            colors=[z(c.category) for c in categories],
        )
    ]

    return Timeline(
        labels=[c.category for c in categories],
        series=series,
        legends=[Legend(label=c.category, color=z(c.category), group=c.category) for c in categories],
        orientation="h",
        height=get_config().bar_height * len(categories),
    )
