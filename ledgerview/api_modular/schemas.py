"""
Pydantic schemas for API responses
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from ..models import AssetBreakdown, Legend
from ..timeline import Timeline, toggle_group


class LegendModel(BaseModel):
    label: str
    color: str
    shape: str = "square"
    group: Optional[str] = None
    selected: bool = True
    toggle: List[str] = Field(default_factory=list, description="Selection after clicking this legend")


class ChartResponse(BaseModel):
    figure: Dict[str, Any]
    legends: List[LegendModel] = Field(default_factory=list)
    selected: List[str] = Field(default_factory=list)
    months: Optional[List[str]] = Field(None, description="YYYY-MM per bar, for drill down")


class BreakdownModel(BaseModel):
    group: str
    investment_amount: str = Field(..., description="Decimal amount as string")
    withdrawal_amount: str
    balance_units: str
    market_amount: str
    gain_amount: str
    xirr: str
    absolute_return: str

    @classmethod
    def from_breakdown(cls, breakdown: AssetBreakdown) -> 'BreakdownModel':
        return cls(
            group=breakdown.group,
            investment_amount=str(breakdown.investment_amount),
            withdrawal_amount=str(breakdown.withdrawal_amount),
            balance_units=str(breakdown.balance_units),
            market_amount=str(breakdown.market_amount),
            gain_amount=str(breakdown.gain_amount),
            xirr=str(breakdown.xirr),
            absolute_return=str(breakdown.absolute_return),
        )


class BreakdownResponse(BaseModel):
    breakdowns: Dict[str, BreakdownModel]
    leaves: List[str]
    selected: List[str]
    total: Optional[BreakdownModel] = None


def legend_models(legends: List[Legend]) -> List[LegendModel]:
    groups = [legend.group for legend in legends if legend.group is not None]
    selected = [legend.group for legend in legends if legend.group is not None and legend.selected]
    return [
        LegendModel(
            **legend.to_dict(),
            toggle=toggle_group(selected, groups, legend.group) if legend.group is not None else [],
        )
        for legend in legends
    ]


def chart_response(figure: Dict[str, Any], timeline: Timeline) -> ChartResponse:
    return ChartResponse(
        figure=figure,
        legends=legend_models(timeline.legends),
        selected=[s.key for s in timeline.series],
        months=timeline.customdata,
    )
