"""
Current-State Snapshot

The newest ledger record drives the product header (name, weight,
producer, certificate badges), independent of the timeline narrative.
"""
from typing import Optional, Sequence

from src.chicktrace.exceptions import EmptyHistory
from src.chicktrace.models.asset_record import AssetRecord, CanonicalEvent
from src.chicktrace.models.timeline import TraceSnapshot
from src.chicktrace.transformers.certificate_links import CertificateLinkBuilder

DEFAULT_PRODUCT_NAME = "Authenticated Poultry"
DEFAULT_WEIGHT_DISPLAY = "Variable"
DEFAULT_PRODUCER = "Verified Farm"
DEFAULT_DESCRIPTION = (
    "This product has been authenticated and tracked via a decentralized "
    "Hyperledger Fabric network."
)

# Header badges, in display order
HEADER_CERTIFICATES = (
    ("vaccine_cert_cid", "Health Cert"),
    ("halal_slaughter_cert_cid", "Halal Slaughter"),
    ("halal_producer_cert_cid", "Halal Process"),
)


def select_current_state(events: Sequence[CanonicalEvent]) -> AssetRecord:
    """
    Return the record of the newest event.

    Args:
        events: Chronologically sorted events, before suppression

    Raises:
        EmptyHistory: If there are no events
    """
    if not events:
        raise EmptyHistory("cannot select current state from an empty history")
    return events[-1].record


def build_snapshot(
    record: AssetRecord,
    asset_id: str,
    link_builder: Optional[CertificateLinkBuilder] = None,
) -> TraceSnapshot:
    """Build the header view for a record."""
    link_builder = link_builder or CertificateLinkBuilder()

    certificate_links = []
    for field, label in HEADER_CERTIFICATES:
        link = link_builder.build(getattr(record, field), label)
        if link is not None:
            certificate_links.append(link)

    # Names the producer, not the current holder
    producer = record.enterprise_name or record.company_name or DEFAULT_PRODUCER

    return TraceSnapshot(
        product_name=record.product_name or DEFAULT_PRODUCT_NAME,
        product_weight=record.product_weight,
        weight_display=f"{record.product_weight} kg" if record.product_weight else DEFAULT_WEIGHT_DISPLAY,
        producer_display_name=producer,
        product_description=record.product_description or DEFAULT_DESCRIPTION,
        asset_id=asset_id,
        certificate_links=certificate_links,
    )
