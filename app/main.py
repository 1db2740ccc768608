"""
HTTP Facade for Ledger Facade

Thin FastAPI layer over the orchestrator. Routes:
- GET  /api/accounts
- GET  /api/budget?categoryName=...[&month=YYYY-MM]
- GET  /api/categories[?month=YYYY-MM]
- POST /api/transaction

DESIGN PRINCIPLES:
1. Routes only translate HTTP to orchestrator calls
2. Every expected failure renders as {"error": ..., "issues": [...]}
3. Startup fails loudly if the configuration or the ledger is unusable

The module-level `app` is the one served, either by `ledger-facade` (run())
or directly with `uvicorn app.main:app`. Tests build their own with
create_app(facade=...).
"""

import sys
from contextlib import asynccontextmanager
from typing import Optional

import structlog
import uvicorn
from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse

from src.audit import AuditLogger, configure_logging, create_correlation_id
from src.config import get_settings, validate_all_settings
from src.errors import BadRequestError, FacadeError
from src.models import (
    AccountsResponse,
    CategoriesResponse,
    CategoryBudget,
    ErrorResponse,
    TransactionResponse,
)
from src.orchestrator import LedgerFacade, connect_ledger, create_app_components
from src.services.ledger import LedgerError


logger = structlog.get_logger("ledger_facade.http")


def _error_responses(*codes: int) -> dict:
    return {code: {"model": ErrorResponse} for code in codes}


async def _startup(app: FastAPI) -> None:
    """Build the facade and open the budget; raises if either fails."""
    settings = get_settings()
    configure_logging(settings.app.log_level)
    audit_logger = AuditLogger()

    actual = settings.actual
    facade, ledger = create_app_components(settings)

    try:
        await connect_ledger(
            ledger,
            attempts=settings.app.startup_connect_attempts,
            audit_logger=audit_logger,
            sync_id=actual.sync_id,
        )
    except LedgerError as e:
        audit_logger.log_startup_failed(
            str(e),
            {"server_url": actual.server_url, "sync_id": actual.sync_id},
        )
        await ledger.close()
        raise

    app.state.facade = facade
    app.state.ledger = ledger


def create_app(facade: Optional[LedgerFacade] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        facade: Pre-built facade (tests). If None, one is built and
                connected to the configured ledger at startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if facade is None:
            await _startup(app)
        else:
            app.state.facade = facade
            app.state.ledger = None
        yield
        if app.state.ledger is not None:
            await app.state.ledger.close()

    app = FastAPI(
        title="Ledger Facade",
        version="1.0.0",
        lifespan=lifespan,
    )
    # Available before startup as well, so TestClient works without a context.
    app.state.facade = facade
    app.state.ledger = None

    @app.middleware("http")
    async def correlation_middleware(request: Request, call_next):
        correlation_id = create_correlation_id()
        request.state.correlation_id = correlation_id
        response = await call_next(request)
        response.headers["X-Correlation-ID"] = str(correlation_id)
        return response

    @app.exception_handler(FacadeError)
    async def facade_error_handler(request: Request, exc: FacadeError):
        body = ErrorResponse(error=exc.message, issues=exc.issues)
        return JSONResponse(
            status_code=exc.status_code,
            content=body.model_dump(exclude_none=True),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            "unhandled_exception",
            method=request.method,
            path=request.url.path,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error="Internal server error").model_dump(exclude_none=True),
        )

    def get_facade(request: Request) -> LedgerFacade:
        return request.app.state.facade

    @app.get(
        "/api/accounts",
        response_model=AccountsResponse,
        responses=_error_responses(500),
    )
    async def list_accounts(
        request: Request,
        facade: LedgerFacade = Depends(get_facade),
    ) -> AccountsResponse:
        return await facade.get_accounts(request.state.correlation_id)

    @app.get(
        "/api/budget",
        response_model=CategoryBudget,
        responses=_error_responses(400, 404, 500),
    )
    async def get_category_budget(
        request: Request,
        category_name: Optional[str] = Query(default=None, alias="categoryName"),
        month: Optional[str] = Query(default=None),
        facade: LedgerFacade = Depends(get_facade),
    ) -> CategoryBudget:
        return await facade.get_category_budget(
            category_name,
            month=month,
            correlation_id=request.state.correlation_id,
        )

    @app.get(
        "/api/categories",
        response_model=CategoriesResponse,
        responses=_error_responses(400, 500),
    )
    async def list_categories(
        request: Request,
        month: Optional[str] = Query(default=None),
        facade: LedgerFacade = Depends(get_facade),
    ) -> CategoriesResponse:
        return await facade.list_categories(
            month=month,
            correlation_id=request.state.correlation_id,
        )

    @app.post(
        "/api/transaction",
        status_code=201,
        response_model=TransactionResponse,
        responses=_error_responses(400, 500),
    )
    async def create_transaction(
        request: Request,
        facade: LedgerFacade = Depends(get_facade),
    ) -> TransactionResponse:
        try:
            body = await request.json()
        except ValueError as e:
            raise BadRequestError("Request body must be valid JSON") from e
        return await facade.create_transaction(
            body,
            correlation_id=request.state.correlation_id,
        )

    return app


def run() -> None:
    """Console entry point: check configuration, then serve."""
    get_settings.cache_clear()
    results = validate_all_settings()

    app_settings = get_settings().app if results.get("app") else None
    configure_logging(app_settings.log_level if app_settings else "INFO")

    failed = [name for name in ("actual", "app") if not results.get(name)]
    if failed:
        audit_logger = AuditLogger()
        for name in failed:
            audit_logger.log_startup_failed(
                "Required configuration is missing or invalid",
                {"settings": name, "error": results.get(f"{name}_error")},
            )
        sys.exit(1)

    uvicorn.run(
        app,
        host=app_settings.host,
        port=app_settings.port,
        log_level=app_settings.log_level.lower(),
    )


app = create_app()


if __name__ == "__main__":
    run()
