"""FastAPI application entry point for Vinora."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from vinora import __version__
from vinora.config import settings
from vinora.database import close_ledger, get_ledger, init_ledger

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        return response


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    if settings.debug:
        logger.warning("Debug mode is enabled; tracebacks are returned to clients")

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    ledger = init_ledger()
    logger.info(
        "Ledger ready: %d wine(s), %d transaction(s)",
        len(ledger.wines),
        len(ledger.transactions),
    )

    yield

    close_ledger()
    logger.info("Ledger snapshot written, shutting down")


app = FastAPI(
    title=settings.app_name,
    description="Wine stock and sales tracking with an AI sommelier",
    version=__version__,
    debug=settings.debug,
    lifespan=lifespan,
)

# Only allow origins from the whitelist; empty list means same-origin only
if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["Content-Type"],
        max_age=600,
    )

app.add_middleware(SecurityHeadersMiddleware)


@app.get("/health", tags=["Health"])
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    try:
        wine_count = len(get_ledger().wines)
    except RuntimeError:
        wine_count = None

    return JSONResponse(
        content={
            "status": "healthy",
            "version": __version__,
            "app_name": settings.app_name,
            "wines": wine_count,
        }
    )


# Import and include routers
from vinora.routers import advisor, dashboard, transactions, wines

app.include_router(wines.router, prefix="/api/wines", tags=["Wines"])
app.include_router(transactions.router, prefix="/api/transactions", tags=["Transactions"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["Dashboard"])
app.include_router(advisor.router, prefix="/api/advisor", tags=["Advisor"])
