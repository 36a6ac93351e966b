"""
Expense chart endpoints
"""

from typing import List, Optional, Tuple

import plotly.graph_objects as go
from fastapi import APIRouter, Depends, Query

from .deps import get_ledger_client, groups_param, month_param, month_range
from .schemas import ChartResponse, chart_response
from ..charts import calendar_figure, figure_json, horizontal_bar_figure, stacked_bar_figure
from ..client import LedgerClient
from ..dates import month_key, now
from ..expense import (
    CalendarDay,
    calendar_data,
    color_scale,
    current_expenses_breakdown,
    expense_group,
    monthly_expenses_timeline,
)
from ..models import Posting
from ..timeline import Timeline, resolve_selection, unique_sorted


router = APIRouter()


def selected_month(month: Optional[str]) -> str:
    """Validated YYYY-MM, defaulting to the current month"""
    return month_key(month_param(month or month_key(now())))


def monthly_chart(postings: List[Posting], groups: Optional[List[str]] = None,
                  from_month: Optional[str] = None,
                  to_month: Optional[str] = None) -> Tuple[Timeline, go.Figure]:
    timeline = monthly_expenses_timeline(postings, groups, month_range(from_month, to_month))
    return timeline, stacked_bar_figure(timeline)


def calendar_chart(postings: List[Posting], month: str,
                   groups: Optional[List[str]] = None) -> Tuple[List[CalendarDay], go.Figure]:
    allowed = resolve_selection(unique_sorted(expense_group(p) for p in postings), groups)
    days = calendar_data(month, postings, allowed)
    return days, calendar_figure(days)


def breakdown_chart(postings: List[Posting], month: str,
                    groups: Optional[List[str]] = None) -> Tuple[Timeline, go.Figure]:
    """Category bars of one month; colors stay stable across months"""
    allowed = set(resolve_selection(unique_sorted(expense_group(p) for p in postings), groups))
    month_postings = [
        p for p in postings
        if month_key(p.date) == month and expense_group(p) in allowed
    ]
    timeline = current_expenses_breakdown(month_postings, color_scale(postings))
    return timeline, horizontal_bar_figure(timeline)


@router.get("/monthly", response_model=ChartResponse)
def get_monthly_expenses_chart(
    from_month: Optional[str] = Query(None, alias="from", description="YYYY-MM"),
    to_month: Optional[str] = Query(None, alias="to", description="YYYY-MM"),
    groups: Optional[List[str]] = Depends(groups_param),
    client: LedgerClient = Depends(get_ledger_client),
):
    """Stacked monthly expenses with yearly trend"""
    timeline, fig = monthly_chart(client.get_expense().expenses, groups, from_month, to_month)
    return chart_response(figure_json(fig), timeline)


@router.get("/calendar")
def get_expense_calendar(
    month: Optional[str] = Query(None, description="YYYY-MM, defaults to the current month"),
    groups: Optional[List[str]] = Depends(groups_param),
    client: LedgerClient = Depends(get_ledger_client),
):
    """Calendar heatmap of one month's expenses"""
    selected = selected_month(month)
    days, fig = calendar_chart(client.get_expense().expenses, selected, groups)

    return {
        "month": selected,
        "figure": figure_json(fig),
        "days": [
            {
                "date": d.date.isoformat(),
                "visible": d.visible,
                "total": str(d.total),
                "label": d.label,
                "color": d.color,
                "slices": [{"category": s.category, "total": str(s.total)} for s in d.slices],
            }
            for d in days
        ],
    }


@router.get("/breakdown", response_model=ChartResponse)
def get_expense_breakdown(
    month: Optional[str] = Query(None, description="YYYY-MM, defaults to the current month"),
    groups: Optional[List[str]] = Depends(groups_param),
    client: LedgerClient = Depends(get_ledger_client),
):
    """Per-category bars for one month"""
    timeline, fig = breakdown_chart(client.get_expense().expenses, selected_month(month), groups)
    return chart_response(figure_json(fig), timeline)
