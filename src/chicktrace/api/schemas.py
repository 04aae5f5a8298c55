"""
Pydantic Schemas for API Responses

Trace results reuse the models in src.chicktrace.models.timeline.
"""
from datetime import datetime
from pydantic import BaseModel


class HealthCheck(BaseModel):
    """Health check response."""
    status: str
    version: str
    ledger_endpoint: str
    timestamp: datetime


class ErrorResponse(BaseModel):
    """Error body returned for failed lookups."""
    detail: str
    error: str
