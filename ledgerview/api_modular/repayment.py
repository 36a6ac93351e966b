"""
Repayment chart endpoints
"""

from typing import List, Optional, Tuple

import plotly.graph_objects as go
from fastapi import APIRouter, Depends

from .deps import get_ledger_client, groups_param
from .schemas import ChartResponse, chart_response
from ..charts import figure_json, stacked_bar_figure
from ..client import LedgerClient
from ..models import Posting
from ..repayment import monthly_repayment_timeline
from ..timeline import Timeline


router = APIRouter()


def repayment_chart(postings: List[Posting],
                    groups: Optional[List[str]] = None) -> Tuple[Timeline, go.Figure]:
    timeline = monthly_repayment_timeline(postings, groups)
    return timeline, stacked_bar_figure(timeline)


@router.get("", response_model=ChartResponse)
def get_repayment_chart(
    groups: Optional[List[str]] = Depends(groups_param),
    client: LedgerClient = Depends(get_ledger_client),
):
    """Monthly liability repayments, filterable by account"""
    timeline, fig = repayment_chart(client.get_repayments().repayments, groups)
    return chart_response(figure_json(fig), timeline)
