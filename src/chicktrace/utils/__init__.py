"""
Utilities Package

Logging helpers shared across the trace components.
"""
from src.chicktrace.utils.logger import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
