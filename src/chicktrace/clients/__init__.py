"""
Clients Package

HTTP clients for the ledger REST bridge.
"""
from .trace_client import TraceClient

__all__ = ["TraceClient"]
