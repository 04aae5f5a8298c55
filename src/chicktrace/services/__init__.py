"""
Services Package
"""
from src.chicktrace.services.trace_service import TraceService, resolve_asset_id

__all__ = ["TraceService", "resolve_asset_id"]
