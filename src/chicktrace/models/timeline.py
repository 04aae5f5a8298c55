"""
Timeline Data Models

Output models handed to the presentation layer: the narrative timeline
and the current-state snapshot.
"""
from datetime import datetime
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class StageLabel(str, Enum):
    """Narrative beat assigned to a timeline event."""

    FARM_HARVEST = "FarmHarvest"
    PROCESSING = "Processing"
    TRANSFORMATION = "Transformation"
    DISPATCH = "Dispatch"
    OWNERSHIP_ACCEPTANCE = "OwnershipAcceptance"
    LEDGER_UPDATE = "LedgerUpdate"

    @property
    def heading(self) -> str:
        """Consumer-facing heading for this stage."""
        return _STAGE_TITLES[self]

    @property
    def is_milestone(self) -> bool:
        """Milestones appear at most once per timeline."""
        return self in (StageLabel.FARM_HARVEST, StageLabel.PROCESSING, StageLabel.TRANSFORMATION)


_STAGE_TITLES = {
    StageLabel.FARM_HARVEST: "Certified Harvest",
    StageLabel.PROCESSING: "Processing & Quality Check",
    StageLabel.TRANSFORMATION: "Final Packaging & SKU Generation",
    StageLabel.DISPATCH: "Digital Dispatch",
    StageLabel.OWNERSHIP_ACCEPTANCE: "Node Acceptance",
    StageLabel.LEDGER_UPDATE: "Network Update",
}


class CertificateLink(BaseModel):
    """Link to a certificate document behind the IPFS gateway."""

    model_config = ConfigDict(frozen=True)

    label: str
    uri: str


class TimelineEvent(BaseModel):
    """
    One beat of the provenance narrative.

    Attributes:
        stage: Narrative stage
        display_name: Resolved participant name
        timestamp: Ledger commit time of the underlying record
        metadata: Ordered detail lines for the beat
        certificate_links: Ordered certificate links for the beat
    """

    model_config = ConfigDict(frozen=True)

    stage: StageLabel
    display_name: str
    timestamp: datetime
    metadata: List[str] = Field(default_factory=list)
    certificate_links: List[CertificateLink] = Field(default_factory=list)

    @property
    def heading(self) -> str:
        return self.stage.heading


class TraceSnapshot(BaseModel):
    """Header-level view of the most recent ledger state."""

    product_name: str
    product_weight: Optional[Union[int, float, str]] = None
    weight_display: str
    producer_display_name: str
    product_description: str
    asset_id: str
    certificate_links: List[CertificateLink] = Field(default_factory=list)


class TraceResult(BaseModel):
    """Complete lookup result: either all of this is produced, or an error."""

    asset_id: str
    snapshot: TraceSnapshot
    timeline: List[TimelineEvent] = Field(default_factory=list)
