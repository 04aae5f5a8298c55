"""
Participant Identity Resolution

Picks the name shown for a ledger record. The dashboard stamps
``enterpriseName`` on every transaction; older records only carry the
company or owner name.
"""
from typing import Optional

from config.settings import settings
from src.chicktrace.models.asset_record import AssetRecord

IDENTITY_FIELDS = ("enterprise_name", "company_name", "owner_name")


def resolve_display_name(record: Optional[AssetRecord], fallback: Optional[str] = None) -> str:
    """
    Resolve a non-empty display name for a record.

    Args:
        record: Ledger record, may be None
        fallback: Label used when no identity field is set
            (defaults to settings.identity_fallback_label)

    Returns:
        First non-empty of enterprise, company, owner name, else the fallback
    """
    if record is not None:
        for field in IDENTITY_FIELDS:
            value = getattr(record, field)
            if value:
                return value
    return fallback or settings.identity_fallback_label
