"""
Income chart endpoints
"""

from typing import Optional, Tuple

import plotly.graph_objects as go
from fastapi import APIRouter, Depends, HTTPException, Query

from .deps import get_ledger_client, month_param
from .schemas import ChartResponse, chart_response
from ..charts import figure_json, horizontal_bar_figure, stacked_bar_figure
from ..client import LedgerClient
from ..colors import COLORS
from ..dates import month_key, now
from ..income import (
    YEARLY_KEYS,
    daily_income_timeline,
    daily_net_income_timeline,
    monthly_income_timeline,
    monthly_net_income_timeline,
    yearly_income_timeline,
    yearly_timeline_of,
)
from ..models import IncomeResponse
from ..timeline import Timeline


router = APIRouter()

YEARLY_SERIES = {
    "net_tax": ("Net Tax", COLORS["tax"]),
    "net_income": ("Net Income", COLORS["income"]),
}


def income_chart(data: IncomeResponse, view: str = "monthly", net: bool = False,
                 month: Optional[str] = None) -> Tuple[Timeline, go.Figure]:
    """Gross or net income timeline, per month or per day of `month`"""
    if view == "daily":
        selected = month_param(month or month_key(now()))
        if net:
            timeline = daily_net_income_timeline(
                data.income_timeline, data.tax_timeline, selected.year, selected.month)
        else:
            timeline = daily_income_timeline(data.income_timeline, selected.year, selected.month)
    elif net:
        timeline = monthly_net_income_timeline(data.income_timeline, data.tax_timeline)
    else:
        timeline = monthly_income_timeline(data.income_timeline)

    return timeline, stacked_bar_figure(timeline)


def yearly_chart(data: IncomeResponse, key: Optional[str] = None) -> Tuple[Timeline, go.Figure]:
    """Income per financial year by source, or one of the yearly totals"""
    if key is None:
        timeline = yearly_income_timeline(data.yearly_cards)
    else:
        if key not in YEARLY_KEYS:
            raise HTTPException(status_code=404, detail=f"Unknown yearly series '{key}'")
        label, color = YEARLY_SERIES[key]
        timeline = yearly_timeline_of(label, key, color, data.yearly_cards)
    return timeline, horizontal_bar_figure(timeline)


@router.get("", response_model=ChartResponse)
def get_income_chart(
    view: str = Query("monthly", pattern="^(monthly|daily)$", description="monthly or daily"),
    net: bool = Query(False, description="Subtract taxes from gross income"),
    month: Optional[str] = Query(None, description="YYYY-MM, daily view only"),
    client: LedgerClient = Depends(get_ledger_client),
):
    """Stacked income timeline, gross or net of taxes"""
    timeline, fig = income_chart(client.get_income(), view, net, month)
    return chart_response(figure_json(fig), timeline)


@router.get("/yearly", response_model=ChartResponse)
def get_yearly_income_chart(client: LedgerClient = Depends(get_ledger_client)):
    """Income per financial year, stacked by source"""
    timeline, fig = yearly_chart(client.get_income())
    return chart_response(figure_json(fig), timeline)


@router.get("/yearly/{key}", response_model=ChartResponse)
def get_yearly_series_chart(key: str, client: LedgerClient = Depends(get_ledger_client)):
    """Net tax or net income per financial year"""
    timeline, fig = yearly_chart(client.get_income(), key)
    return chart_response(figure_json(fig), timeline)
