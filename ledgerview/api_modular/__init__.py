"""
Ledgerview Chart API Application Factory
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..client import LedgerAPIError
from ..logging_config import get_logger, log_action
from .assets import router as assets_router
from .deps import close_ledger_client
from .expense import router as expense_router
from .income import router as income_router
from .repayment import router as repayment_router

logger = get_logger("ledgerview.api")


def register_error_handlers(app: FastAPI):
    """Map ledger and parameter errors to HTTP responses"""

    @app.exception_handler(LedgerAPIError)
    async def ledger_api_error_handler(request: Request, exc: LedgerAPIError):
        log_action(logger, "error", f"Ledger API error on {request.url.path}: {exc}",
                   action="proxy", resource=exc.path,
                   extra={"upstream_status": exc.status_code})
        return JSONResponse(
            status_code=502,
            content={"detail": str(exc), "upstream_status": exc.status_code, "path": exc.path},
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        logger.warning(f"Bad request on {request.url.path}: {exc}")
        return JSONResponse(status_code=400, content={"detail": str(exc)})


def include_routers(app: FastAPI):
    app.include_router(income_router, prefix="/api/charts/income", tags=["Income"])
    app.include_router(expense_router, prefix="/api/charts/expense", tags=["Expense"])
    app.include_router(repayment_router, prefix="/api/charts/repayment", tags=["Repayment"])
    app.include_router(assets_router, prefix="/api/assets", tags=["Assets"])


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    close_ledger_client()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application"""
    app = FastAPI(
        title="Ledgerview Chart API",
        description="Income, expense, repayment and asset charts over a ledger API",
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

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "ledgerview_api",
            "version": __version__,
        }

    return app
