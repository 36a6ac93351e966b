"""
Plotly Figure Builders

Turns the prepared Timeline / calendar data into Plotly figures. Negative
values stack below the axis (relative bar mode), matching how deductions
and refunds are shown next to income and expenses.
"""

import json
import math
from typing import List, Optional, Sequence

import plotly.graph_objects as go

from .colors import COLORS, darken, with_alpha
from .config import get_config
from .expense import CalendarDay
from .timeline import Timeline


FIG_FONT = "Inter, -apple-system, BlinkMacSystemFont, sans-serif"
WEEKDAYS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

# Compact SI ticks (1.2k, 3.4M); Plotly cannot call back into Python formatters
CRUDE_TICK_FORMAT = "~s"


def skip_ticks(labels: Sequence[str], width: Optional[int] = None, min_spacing: int = 30) -> List[str]:
    """Every n-th label so that shown labels are at least `min_spacing` px apart"""
    if not labels:
        return []
    width = width or get_config().chart_width
    per_label = width / len(labels)
    step = max(1, math.ceil(min_spacing / per_label))
    return [label for i, label in enumerate(labels) if i % step == 0]


def _bar_width(count: int) -> Optional[float]:
    """Bar width in category units, capped at max_bar_width pixels"""
    if count == 0:
        return None
    config = get_config()
    band = config.chart_width / count
    return min(0.9, config.max_bar_width / band)


def _apply_layout(fig: go.Figure, title: Optional[str], height: Optional[int] = None) -> go.Figure:
    if title:
        fig.update_layout(title=dict(text=title, font=dict(size=16, color=COLORS["text"])))
    fig.update_layout(
        font=dict(family=FIG_FONT, size=12, color=COLORS["text"]),
        margin=dict(t=50 if title else 20, b=80, l=60, r=30),
        plot_bgcolor=COLORS["white"],
        paper_bgcolor=COLORS["white"],
        hoverlabel=dict(align="left"),
        showlegend=False,
        height=height or get_config().chart_height,
    )
    fig.update_xaxes(gridcolor=COLORS["grid"], zerolinecolor=COLORS["grid"])
    fig.update_yaxes(gridcolor=COLORS["grid"], zerolinecolor=COLORS["grid"])
    return fig


def empty_figure(title: Optional[str] = None, message: str = "No data") -> go.Figure:
    fig = go.Figure()
    fig.update_layout(
        annotations=[dict(text=message, x=0.5, y=0.5, xref="paper", yref="paper", showarrow=False)],
    )
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    return _apply_layout(fig, title)


def stacked_bar_figure(timeline: Timeline, title: Optional[str] = None) -> go.Figure:
    """Vertical stacked timeline with optional yearly trend step line"""
    if timeline.is_empty:
        return empty_figure(title)

    fig = go.Figure()
    width = _bar_width(len(timeline.labels))
    for series in timeline.series:
        fig.add_trace(go.Bar(
            x=timeline.labels,
            y=[float(v) for v in series.values],
            name=series.key,
            marker_color=series.colors or series.color,
            hovertext=series.hover,
            hoverinfo="text",
            customdata=timeline.customdata,
            width=width,
        ))

    if timeline.trend is not None:
        trend = [float(v) for v in timeline.trend]
        # White underlay keeps the dashed line readable over the bars
        fig.add_trace(go.Scatter(
            x=timeline.labels, y=trend, mode="lines", line_shape="hv",
            line=dict(color=COLORS["white"], width=2), hoverinfo="skip", name="trend",
        ))
        fig.add_trace(go.Scatter(
            x=timeline.labels, y=trend, mode="lines", line_shape="hv",
            line=dict(color=timeline.trend_color or COLORS["expenses"], width=2, dash="dash"),
            hoverinfo="skip", name="trend",
        ))

    fig.update_layout(barmode="relative", bargap=0.1)
    fig.update_xaxes(
        type="category",
        tickangle=-45,
        tickmode="array",
        tickvals=skip_ticks(timeline.labels),
    )
    fig.update_yaxes(tickformat=CRUDE_TICK_FORMAT)
    return _apply_layout(fig, title, timeline.height)


def horizontal_bar_figure(timeline: Timeline, title: Optional[str] = None) -> go.Figure:
    """Horizontal stacked bars (yearly income, monthly breakdown)"""
    if timeline.is_empty:
        return empty_figure(title)

    fig = go.Figure()
    for series in timeline.series:
        colors = series.colors or [series.color] * len(timeline.labels)
        bar = dict(
            x=[float(v) for v in series.values],
            y=timeline.labels,
            orientation="h",
            name=series.key,
            marker_color=colors,
            hovertext=series.hover,
            hoverinfo="text",
        )
        if series.text:
            bar.update(
                text=series.text,
                textposition="outside",
                textfont=dict(family="monospace", color=[darken(c, 0.8) for c in colors]),
                cliponaxis=False,
            )
        fig.add_trace(go.Bar(**bar))

    fig.update_layout(barmode="relative", bargap=0.1)
    fig.update_xaxes(tickformat=CRUDE_TICK_FORMAT, rangemode="tozero")
    fig.update_yaxes(type="category")

    height = (timeline.height or 0) + 80
    fig = _apply_layout(fig, title, max(height, 160))
    if any(s.text for s in timeline.series):
        fig.update_layout(margin=dict(r=160))
    return fig


def calendar_figure(days: List[CalendarDay], title: Optional[str] = None) -> go.Figure:
    """Month heatmap: one row per week, Sunday first, opacity by day total"""
    if not days:
        return empty_figure(title)

    weeks = math.ceil(len(days) / 7)
    z, text, hover = [], [], []
    for week in range(weeks):
        row = days[week * 7:(week + 1) * 7]
        z.append([float(d.total) if d.visible else None for d in row])
        text.append([
            f"{d.date.day}<br><b>{d.label}</b>" if d.visible else "" for d in row
        ])
        hover.append([d.hover or d.date.strftime("%d %b %Y") for d in row])

    visible_totals = [float(d.total) for d in days if d.visible]
    base = COLORS["loss_text"]

    fig = go.Figure(go.Heatmap(
        z=z,
        x=WEEKDAYS,
        y=[f"W{i + 1}" for i in range(weeks)],
        text=text,
        texttemplate="%{text}",
        hovertext=hover,
        hoverinfo="text",
        colorscale=[[0, with_alpha(base, 0.3)], [1, with_alpha(base, 1.0)]],
        zmin=min(visible_totals, default=0),
        zmax=max(visible_totals, default=0) or 1,
        showscale=False,
        xgap=3,
        ygap=3,
    ))
    fig.update_yaxes(autorange="reversed", showticklabels=False)
    fig.update_xaxes(side="top")
    return _apply_layout(fig, title, 80 * weeks + 60)


def figure_json(fig: go.Figure) -> dict:
    """JSON-safe dict of a figure for API responses"""
    return json.loads(fig.to_json())
