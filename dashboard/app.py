"""Ledgerview Dashboard - FastAPI Application"""

import sys
from pathlib import Path
from typing import Dict, List, Optional
from urllib.parse import urlencode

# Add parent to path so the ledgerview package is importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ledgerview import __version__
from ledgerview.api_modular import include_routers, lifespan, register_error_handlers
from ledgerview.api_modular.assets import filtered_breakdown
from ledgerview.api_modular.deps import get_ledger_client, groups_param
from ledgerview.api_modular.expense import breakdown_chart, calendar_chart, monthly_chart, selected_month
from ledgerview.api_modular.income import income_chart, yearly_chart
from ledgerview.api_modular.repayment import repayment_chart
from ledgerview.api_modular.schemas import legend_models
from ledgerview.client import LedgerClient, StaticLedgerClient
from ledgerview.config import get_config
from ledgerview.currency import format_currency, format_percentage, quantize
from ledgerview.logging_config import get_logger

logger = get_logger("ledgerview.dashboard")

TABS = ["income", "expense", "repayment", "assets"]

PLOTLY_CDN = "https://cdn.plot.ly/plotly-2.35.2.min.js"

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))


def render_figure(fig) -> str:
    """Embeddable <div> for a figure; plotly.js is loaded once by the layout"""
    return fig.to_html(full_html=False, include_plotlyjs=False, config={"displayModeBar": False})


def legend_links(request: Request, timeline, param: Optional[str] = "groups") -> List[Dict]:
    """Legend entries with the URL that applies their toggle selection, if `param` filters"""
    links = []
    for legend in legend_models(timeline.legends):
        href = None
        if param is not None and legend.group is not None:
            query = [(k, v) for k, v in request.query_params.multi_items() if k != param]
            query += [(param, group) for group in legend.toggle]
            href = f"{request.url.path}?{urlencode(query)}"
        links.append({**legend.model_dump(), "href": href})
    return links


def breakdown_cells(b) -> Dict:
    """Display strings for one breakdown row"""
    return {
        "investment": format_currency(b.investment_amount),
        "withdrawal": format_currency(b.withdrawal_amount),
        "market": format_currency(b.market_amount),
        "gain": format_currency(b.gain_amount),
        "gain_positive": not b.gain_amount.startswith("-"),
        "xirr": f"{quantize(b.xirr, 2)}%",
        "absolute_return": format_percentage(b.absolute_return),
    }


def create_demo_client() -> StaticLedgerClient:
    from dashboard.seed import seed_payloads
    return StaticLedgerClient(seed_payloads())


def create_app() -> FastAPI:
    """Create and configure the FastAPI application"""
    config = get_config()

    app = FastAPI(
        title="Ledgerview Dashboard",
        description="Personal finance charts over a plain text ledger",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    include_routers(app)

    if config.demo_mode:
        demo_client = create_demo_client()
        app.dependency_overrides[get_ledger_client] = lambda: demo_client
        logger.info("Demo mode: serving seeded ledger data")

    @app.get("/health")
    async def health_check(client: LedgerClient = Depends(get_ledger_client)):
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "ledgerview_dashboard",
            "version": __version__,
            "ledger_api": "up" if client.health_check() else "down",
        }

    def page(request: Request, tab: str, context: Dict) -> HTMLResponse:
        return templates.TemplateResponse(request, f"{tab}.html", {
            "tab": tab,
            "tabs": TABS,
            "plotly_cdn": PLOTLY_CDN,
            "demo_mode": config.demo_mode,
            **context,
        })

    def income_page(request: Request, client: LedgerClient, view: str, net: bool,
                    month: Optional[str]) -> HTMLResponse:
        data = client.get_income()
        timeline, fig = income_chart(data, view, net, month)
        yearly = [yearly_chart(data)[1]] + [yearly_chart(data, key)[1] for key in ("net_tax", "net_income")]
        return page(request, "income", {
            "view": view,
            "net": net,
            "month": selected_month(month) if view == "daily" else None,
            "chart": render_figure(fig),
            "legends": legend_links(request, timeline, param=None),
            "yearly_charts": [render_figure(f) for f in yearly],
        })

    def expense_page(request: Request, client: LedgerClient, groups: Optional[List[str]],
                     from_month: Optional[str], to_month: Optional[str],
                     month: Optional[str]) -> HTMLResponse:
        postings = client.get_expense().expenses
        selected = selected_month(month)
        timeline, fig = monthly_chart(postings, groups, from_month, to_month)
        _, calendar_fig = calendar_chart(postings, selected, groups)
        _, breakdown_fig = breakdown_chart(postings, selected, groups)
        return page(request, "expense", {
            "month": selected,
            "groups": groups or [],
            "from_month": from_month or "",
            "to_month": to_month or "",
            "chart": render_figure(fig),
            "legends": legend_links(request, timeline),
            "calendar_chart": render_figure(calendar_fig),
            "breakdown_chart": render_figure(breakdown_fig),
        })

    def repayment_page(request: Request, client: LedgerClient,
                       groups: Optional[List[str]]) -> HTMLResponse:
        timeline, fig = repayment_chart(client.get_repayments().repayments, groups)
        return page(request, "repayment", {
            "chart": render_figure(fig),
            "legends": legend_links(request, timeline),
        })

    def assets_page(request: Request, client: LedgerClient, accounts: Optional[List[str]],
                    search: Optional[str]) -> HTMLResponse:
        response = filtered_breakdown(client.get_asset_balance().asset_breakdowns, accounts, search)
        rows = [
            {**breakdown_cells(b), "path": path, "depth": path.count(":"), "is_leaf": path in response.leaves}
            for path, b in response.breakdowns.items()
        ]
        return page(request, "assets", {
            "rows": rows,
            "search": search or "",
            "leaves": response.leaves,
            "selected": response.selected,
            "total": {**breakdown_cells(response.total), "path": response.total.group},
        })

    @app.get("/", response_class=HTMLResponse)
    def index(request: Request, client: LedgerClient = Depends(get_ledger_client)):
        """Dashboard home, the income tab"""
        return income_page(request, client, "monthly", False, None)

    @app.get("/{tab}", response_class=HTMLResponse)
    def dashboard_tab(
        request: Request,
        tab: str,
        view: str = Query("monthly", pattern="^(monthly|daily)$"),
        net: bool = Query(False),
        month: Optional[str] = Query(None, description="YYYY-MM"),
        from_month: Optional[str] = Query(None, alias="from"),
        to_month: Optional[str] = Query(None, alias="to"),
        groups: Optional[List[str]] = Depends(groups_param),
        accounts: Optional[List[str]] = Query(None),
        search: Optional[str] = Query(None),
        client: LedgerClient = Depends(get_ledger_client),
    ):
        """One dashboard tab with its filters"""
        if tab not in TABS:
            raise HTTPException(status_code=404, detail=f"Unknown tab '{tab}'")

        if tab == "income":
            return income_page(request, client, view, net, month)
        if tab == "expense":
            return expense_page(request, client, groups, from_month or None, to_month or None, month or None)
        if tab == "repayment":
            return repayment_page(request, client, groups)
        return assets_page(request, client, accounts, search)

    return app
