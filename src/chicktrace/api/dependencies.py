"""
FastAPI Dependencies

Provides dependency injection for the trace service.
"""
from functools import lru_cache

from src.chicktrace.services.trace_service import TraceService


@lru_cache(maxsize=1)
def get_trace_service() -> TraceService:
    """
    Trace service dependency.

    Returns:
        Shared TraceService (holds configuration and an HTTP session only)
    """
    return TraceService()
