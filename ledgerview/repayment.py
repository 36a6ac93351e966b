"""
Repayment Charts Module

Monthly liability repayments stacked per account, from the first repayment
up to the current month, with legend driven group filtering.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from .accounts import rest_name
from .colors import generate_color_scheme
from .currency import format_currency
from .dates import MONTH_FORMAT, for_each_month, month_key, now, start_of_month
from .models import Legend, Posting
from .timeline import BarSeries, Timeline, resolve_selection, sum_by_group, unique_sorted
from .tooltip import AMOUNT, tooltip


ZERO = Decimal('0')


def repayment_group(posting: Posting) -> str:
    return rest_name(posting.account)


def repayment_tooltip(postings: List[Posting], allowed_groups: Iterable[str], month) -> str:
    allowed = set(allowed_groups)
    visible = [p for p in postings if repayment_group(p) in allowed]
    total = sum((p.amount for p in visible), ZERO)
    rows = [
        [rest_name(p.account), (format_currency(p.amount), AMOUNT)]
        for p in sorted(visible, key=lambda p: p.amount, reverse=True)
    ]
    return tooltip(rows, total=format_currency(total), header=month.strftime("%b %Y"))


def monthly_repayment_timeline(postings: List[Posting],
                               allowed_groups: Optional[Iterable[str]] = None) -> Timeline:
    """
    Stack repayments per month. Groups outside `allowed_groups` are dropped
    from the stack and from the tooltips but keep their (unselected) legend.
    """
    if not postings:
        return Timeline()

    groups = unique_sorted(repayment_group(p) for p in postings)
    selection = resolve_selection(groups, allowed_groups)
    z = generate_color_scheme(groups)

    by_month: Dict[str, List[Posting]] = defaultdict(list)
    for posting in postings:
        by_month[month_key(posting.date)].append(posting)

    start = min(p.date for p in postings)
    end = start_of_month(now())
    months = list(for_each_month(start, end))

    month_postings = [by_month.get(month_key(m), []) for m in months]
    values_by_month = [sum_by_group(ps, repayment_group) for ps in month_postings]
    hover = [repayment_tooltip(ps, selection, m) for ps, m in zip(month_postings, months)]

    series = [
        BarSeries(
            key=group,
            color=z(group),
            values=[values.get(group, ZERO) for values in values_by_month],
            hover=hover,
        )
        for group in selection
    ]

    legends = [
        Legend(label=group, color=z(group), group=group, selected=group in selection)
        for group in groups
    ]

    return Timeline(
        labels=[m.strftime(MONTH_FORMAT) for m in months],
        series=series,
        legends=legends,
        customdata=[month_key(m) for m in months],
    )
