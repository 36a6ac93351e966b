"""
Income Charts Module

Prepares the income timelines: gross and net income per month or per day,
yearly income per financial year, and the yearly net tax / net income bars.
Income postings carry negative amounts in the ledger, so every value shown
here is the negated posting amount.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Dict, List

from .accounts import rest_name, second_name
from .colors import ColorScale, generate_color_scheme
from .config import get_config
from .currency import format_currency
from .dates import DAY_FORMAT, MONTH_FORMAT, end_of_month, financial_year, month_key
from .models import Income, IncomeYearlyCard, Legend, Posting, Tax
from .timeline import BarSeries, Timeline, sum_by_group, unique_sorted
from .tooltip import AMOUNT, create_tooltip_content, tooltip


NET_INCOME_ACCOUNT = "Income:Net"
YEARLY_KEYS = ("net_tax", "net_income")

ZERO = Decimal('0')


def income_group(posting: Posting) -> str:
    return second_name(posting.account)


def _income_amount(posting: Posting) -> Decimal:
    return -posting.amount


def create_income_tooltip_content(postings: List[Posting], positive_segment: bool,
                                  max_entries: int = None) -> str:
    """Hover text for one bar segment: income above the axis, deductions below"""
    if max_entries is None:
        max_entries = get_config().income_tooltip_entries

    if positive_segment:
        condition = lambda p: -p.amount > 0
    else:
        condition = lambda p: -p.amount < 0

    return create_tooltip_content(
        postings,
        get_amount=_income_amount,
        get_label=lambda p: rest_name(p.account),
        filter_condition=condition,
        max_entries=max_entries,
    )


def create_yearly_tooltip_content(postings: List[Posting], max_entries: int = None) -> str:
    if max_entries is None:
        max_entries = get_config().income_tooltip_entries

    return create_tooltip_content(
        postings,
        get_amount=_income_amount,
        get_label=lambda p: income_group(p) or "Other",
        max_entries=max_entries,
    )


def transform_to_daily_data(incomes: List[Income], year: int, month: int) -> List[Income]:
    """Regroup the postings of one month into one Income per calendar day"""
    month_start = date(year, month, 1)
    days_in_month = end_of_month(month_start).day

    by_day: Dict[int, List[Posting]] = defaultdict(list)
    for income in incomes:
        if income.date.year == year and income.date.month == month:
            for posting in income.postings:
                by_day[posting.date.day].append(posting)

    return [
        Income(date=month_start.replace(day=day), postings=by_day.get(day, []))
        for day in range(1, days_in_month + 1)
    ]


def _net_income(income: Income, tax_amount: Decimal) -> Income:
    gross = sum((_income_amount(p) for p in income.postings), ZERO)
    net = gross - tax_amount

    if income.postings:
        base = income.postings[0]
    else:
        base = Posting(
            id="net-income",
            date=income.date,
            payee="Net Income",
            account=NET_INCOME_ACCOUNT,
            amount=ZERO,
        )

    # Negative because income is negative in the ledger
    net_posting = base.model_copy(update={"amount": -net, "account": NET_INCOME_ACCOUNT})
    return Income(date=income.date, postings=[net_posting])


def calculate_net_income_monthly(incomes: List[Income], taxes: List[Tax]) -> List[Income]:
    tax_by_month: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    for tax in taxes:
        tax_by_month[month_key(tax.start_date)] += sum((p.amount for p in tax.postings), ZERO)

    return [
        _net_income(income, tax_by_month.get(month_key(income.date), ZERO))
        for income in incomes
    ]


def calculate_net_income_daily(incomes: List[Income], taxes: List[Tax],
                               year: int, month: int) -> List[Income]:
    daily = transform_to_daily_data(incomes, year, month)

    tax_by_day: Dict[date, Decimal] = defaultdict(lambda: ZERO)
    for tax in taxes:
        for posting in tax.postings:
            if posting.date.year == year and posting.date.month == month:
                tax_by_day[posting.date] += posting.amount

    return [_net_income(income, tax_by_day.get(income.date, ZERO)) for income in daily]


def income_timeline(incomes: List[Income], time_format: str) -> Timeline:
    """Stacked diverging bars of income per group for each Income period"""
    postings = [p for income in incomes for p in income.postings]
    groups = unique_sorted(income_group(p) for p in postings)
    group_totals = sum_by_group(postings, income_group, _income_amount)
    z = generate_color_scheme(groups)

    labels = [income.date.strftime(time_format) for income in incomes]
    values_by_period = [sum_by_group(income.postings, income_group, _income_amount) for income in incomes]

    series = []
    for group in groups:
        values = [values.get(group, ZERO) for values in values_by_period]
        hover = [
            create_income_tooltip_content(income.postings, positive_segment=value > 0)
            for income, value in zip(incomes, values)
        ]
        series.append(BarSeries(key=group, color=z(group), values=values, hover=hover))

    legends = [
        Legend(label=f"{group}\n{format_currency(group_totals[group])}", color=z(group), group=group)
        for group in groups
    ]

    return Timeline(labels=labels, series=series, legends=legends)


def monthly_income_timeline(incomes: List[Income]) -> Timeline:
    return income_timeline(incomes, MONTH_FORMAT)


def daily_income_timeline(incomes: List[Income], year: int, month: int) -> Timeline:
    return income_timeline(transform_to_daily_data(incomes, year, month), DAY_FORMAT)


def monthly_net_income_timeline(incomes: List[Income], taxes: List[Tax]) -> Timeline:
    return income_timeline(calculate_net_income_monthly(incomes, taxes), MONTH_FORMAT)


def daily_net_income_timeline(incomes: List[Income], taxes: List[Tax],
                              year: int, month: int) -> Timeline:
    return income_timeline(calculate_net_income_daily(incomes, taxes, year, month), DAY_FORMAT)


def _yearly_height(cards: List[IncomeYearlyCard]) -> int:
    start = min(c.start_date for c in cards)
    end = max(c.end_date for c in cards)
    return get_config().bar_height * max(1, end.year - start.year)


def yearly_income_timeline(cards: List[IncomeYearlyCard]) -> Timeline:
    """Horizontal stacked bars, one per financial year, grouped by income source"""
    if not cards:
        return Timeline(orientation="h")

    groups = unique_sorted(second_name(p.account) for card in cards for p in card.postings)
    z = generate_color_scheme(groups)

    values_by_year = [sum_by_group(card.postings, lambda p: second_name(p.account), _income_amount)
                      for card in cards]
    hover = [create_yearly_tooltip_content(card.postings) for card in cards]

    series = [
        BarSeries(
            key=group,
            color=z(group),
            values=[values.get(group, ZERO) for values in values_by_year],
            hover=hover,
        )
        for group in groups
    ]

    return Timeline(
        labels=[financial_year(c.start_date, c.end_date) for c in cards],
        series=series,
        legends=[Legend(label=group, color=z(group), group=group) for group in groups],
        orientation="h",
        height=_yearly_height(cards),
    )


def yearly_timeline_of(label: str, key: str, color: str,
                       cards: List[IncomeYearlyCard]) -> Timeline:
    """Single series bars of `net_tax` or `net_income` per financial year"""
    if key not in YEARLY_KEYS:
        raise ValueError(f"Unknown yearly key '{key}', expected one of {', '.join(YEARLY_KEYS)}")

    if not cards:
        return Timeline(orientation="h")

    z = ColorScale([label], palette=[color])
    values = [getattr(card, key) for card in cards]
    hover = [tooltip([[label, (format_currency(value), AMOUNT)]]) for value in values]

    return Timeline(
        labels=[financial_year(c.start_date, c.end_date) for c in cards],
        series=[BarSeries(key=label, color=z(label), values=values, hover=hover)],
        legends=[Legend(label=label, color=z(label))],
        orientation="h",
        height=_yearly_height(cards),
    )
