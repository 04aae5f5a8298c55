"""
Certificate Link Builder

Turns IPFS content identifiers stamped on ledger records into gateway links.
"""
from typing import Optional

from config.settings import settings
from src.chicktrace.models.timeline import CertificateLink

# Upstream producers stringify a missing CID as "undefined"
ABSENT_CID_SENTINELS = frozenset({"", "undefined"})


def is_valid_cid(cid: Optional[str]) -> bool:
    """A CID is usable unless it is missing, empty or a stringified absence."""
    if cid is None:
        return False
    return cid not in ABSENT_CID_SENTINELS


class CertificateLinkBuilder:
    """Builds ``<gateway>/<cid>`` links for certificate documents."""

    def __init__(self, gateway_base: Optional[str] = None):
        """
        Args:
            gateway_base: Override the IPFS gateway (defaults to settings.ipfs_gateway_url)
        """
        self.gateway_base = (gateway_base or settings.ipfs_gateway_url).rstrip("/")

    def build(self, cid: Optional[str], label: str) -> Optional[CertificateLink]:
        """Return a link for the CID, or None when the CID is not usable."""
        if not is_valid_cid(cid):
            return None
        return CertificateLink(label=label, uri=f"{self.gateway_base}/{cid}")
