"""
FastAPI Main Application

ChickChain consumer trace API.
"""
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.settings import settings
from src.chicktrace import __version__
from src.chicktrace.api.routers import trace
from src.chicktrace.api.schemas import HealthCheck
from src.chicktrace.exceptions import (
    EmptyHistory,
    LedgerLookupEmpty,
    MissingIdentifier,
    TraceError,
)
from src.chicktrace.utils.logger import get_logger, setup_logging

setup_logging()
logger = get_logger(__name__)

app = FastAPI(
    title="ChickChain Trace API",
    description="Consumer provenance lookups over the poultry supply-chain ledger",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(trace.router)


def error_status(exc: TraceError) -> int:
    """HTTP status for a trace error."""
    if isinstance(exc, MissingIdentifier):
        return 400
    if isinstance(exc, (LedgerLookupEmpty, EmptyHistory)):
        return 404
    # Transport, response shape and record encoding are upstream faults
    return 502


@app.exception_handler(TraceError)
async def handle_trace_error(request: Request, exc: TraceError):
    status_code = error_status(exc)
    logger.info("trace_error_response", path=request.url.path, status_code=status_code, error=type(exc).__name__)
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.user_message, "error": type(exc).__name__},
    )


@app.get("/health", response_model=HealthCheck, tags=["health"])
def health_check():
    """
    Health check endpoint.

    Returns:
        Service status and configured ledger endpoint
    """
    return HealthCheck(
        status="healthy",
        version=__version__,
        ledger_endpoint=settings.trace_api_url,
        timestamp=datetime.now(timezone.utc),
    )


@app.get("/", tags=["root"])
def root():
    """
    Root endpoint.

    Returns:
        API information
    """
    return {
        "name": "ChickChain Trace API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
        "trace": "/api/v1/trace?id=<serial>",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.chicktrace.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
