"""
Chart-ready series shared by the income, expense and repayment modules.

A Timeline is what the aggregation code hands to the Plotly builders:
category labels along one axis, one BarSeries per group stacked on the
other, plus the legend entries that drive group filtering.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from .models import Legend, Posting


@dataclass
class BarSeries:
    key: str
    color: str
    values: List[Decimal]
    hover: List[Optional[str]]
    text: Optional[List[str]] = None
    colors: Optional[List[str]] = None  # per bar, overrides `color`


@dataclass
class Timeline:
    labels: List[str] = field(default_factory=list)
    series: List[BarSeries] = field(default_factory=list)
    legends: List[Legend] = field(default_factory=list)
    orientation: str = "v"
    trend: Optional[List[Decimal]] = None
    trend_color: Optional[str] = None
    customdata: Optional[List[str]] = None
    height: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return not self.labels

    def totals(self) -> List[Decimal]:
        """Net stacked value per label"""
        return [
            sum((s.values[i] for s in self.series), Decimal('0'))
            for i in range(len(self.labels))
        ]


def sum_by_group(postings: Iterable[Posting],
                 group: Callable[[Posting], str],
                 amount: Callable[[Posting], Decimal] = lambda p: p.amount) -> Dict[str, Decimal]:
    totals = defaultdict(lambda: Decimal('0'))
    for posting in postings:
        totals[group(posting)] += amount(posting)
    return dict(totals)


def unique_sorted(values: Iterable[str]) -> List[str]:
    return sorted(set(values))


def toggle_group(selected: Sequence[str], groups: Sequence[str], group: str) -> List[str]:
    """
    Legend click behaviour: isolate the clicked group, or restore every
    group when it is already the only one shown.
    """
    if len(selected) == 1 and selected[0] == group:
        return list(groups)
    return [group]


def resolve_selection(groups: Sequence[str], allowed: Optional[Iterable[str]]) -> List[str]:
    """Allowed groups in display order; None or an empty match means all"""
    if allowed is None:
        return list(groups)
    allowed = set(allowed)
    selection = [g for g in groups if g in allowed]
    return selection or list(groups)
