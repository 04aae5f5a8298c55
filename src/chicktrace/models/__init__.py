"""
Models Package

Ledger input records and narrative output models.
"""
from src.chicktrace.models.asset_record import AssetRecord, CanonicalEvent
from src.chicktrace.models.timeline import (
    CertificateLink,
    StageLabel,
    TimelineEvent,
    TraceResult,
    TraceSnapshot,
)

__all__ = [
    "AssetRecord",
    "CanonicalEvent",
    "CertificateLink",
    "StageLabel",
    "TimelineEvent",
    "TraceResult",
    "TraceSnapshot",
]
