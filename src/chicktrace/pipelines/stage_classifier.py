"""
Lifecycle Stage Classifier

Folds the chronologically sorted ledger history into narrative beats.

A batch is updated many times by the same participants; consumers only
need one beat per lifecycle stage. Three one-way latches make the
milestone stages (harvest, processing, transformation) claimable once:
the first qualifying record wins and later look-alikes fall through to
the generic logistics beats. Generic beats use an owner-continuity check:
a record resolving to the same participant as its predecessor is a
metadata update, not a handover.
"""
from dataclasses import dataclass, replace
from typing import ClassVar, Iterable, List, Optional, Sequence, Tuple, Union

from config.settings import settings
from src.chicktrace.models.asset_record import AssetRecord, CanonicalEvent
from src.chicktrace.models.timeline import StageLabel, TimelineEvent
from src.chicktrace.transformers.certificate_links import CertificateLinkBuilder
from src.chicktrace.transformers.identity_resolver import resolve_display_name
from src.chicktrace.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_ORIGIN = "Selangor Region"

STATUS_IN_TRANSIT = "IN_TRANSIT"
STATUS_RECEIVED = "RECEIVED"


@dataclass(frozen=True)
class ClassifierState:
    """Latches and owner memo threaded through one classification pass."""

    farm_shown: bool = False
    slaughter_shown: bool = False
    transform_shown: bool = False
    previous_name: Optional[str] = None


@dataclass(frozen=True)
class FarmHarvest:
    label: ClassVar[StageLabel] = StageLabel.FARM_HARVEST
    certificate_label: ClassVar[str] = "Farm Health Audit"

    origin: str
    certificate_cid: Optional[str] = None

    def metadata(self) -> List[str]:
        return [f"Origin: {self.origin}"]


@dataclass(frozen=True)
class Processing:
    label: ClassVar[StageLabel] = StageLabel.PROCESSING
    certificate_label: ClassVar[str] = "Halal Verification"

    details: str
    slaughter_date: Optional[str] = None
    certificate_cid: Optional[str] = None

    def metadata(self) -> List[str]:
        lines = [f'"{self.details}"']
        if self.slaughter_date:
            lines.append(f"Slaughtered on {self.slaughter_date}")
        return lines


@dataclass(frozen=True)
class Transformation:
    label: ClassVar[StageLabel] = StageLabel.TRANSFORMATION
    certificate_label: ClassVar[str] = "Certified Process Log"

    product_name: Optional[str] = None
    certificate_cid: Optional[str] = None

    def metadata(self) -> List[str]:
        if self.product_name:
            return [f"{self.product_name} ready for retail"]
        return ["Ready for retail"]


@dataclass(frozen=True)
class Dispatch:
    label: ClassVar[StageLabel] = StageLabel.DISPATCH
    certificate_label: ClassVar[Optional[str]] = None

    recipient: str
    certificate_cid: ClassVar[Optional[str]] = None

    def metadata(self) -> List[str]:
        return [f"Moving to {self.recipient}"]


@dataclass(frozen=True)
class OwnershipAcceptance:
    label: ClassVar[StageLabel] = StageLabel.OWNERSHIP_ACCEPTANCE
    certificate_label: ClassVar[Optional[str]] = None

    owner: str
    certificate_cid: ClassVar[Optional[str]] = None

    def metadata(self) -> List[str]:
        return [f"Verified receipt by {self.owner}"]


@dataclass(frozen=True)
class LedgerUpdate:
    label: ClassVar[StageLabel] = StageLabel.LEDGER_UPDATE
    certificate_label: ClassVar[Optional[str]] = None
    certificate_cid: ClassVar[Optional[str]] = None

    def metadata(self) -> List[str]:
        return ["State recorded on ledger"]


Stage = Union[FarmHarvest, Processing, Transformation, Dispatch, OwnershipAcceptance, LedgerUpdate]


def classify_record(
    record: AssetRecord,
    state: ClassifierState,
    display_name: str,
    fallback_label: Optional[str] = None,
    default_origin: str = DEFAULT_ORIGIN,
) -> Tuple[ClassifierState, Stage]:
    """
    Classify one record against the current latches. First match wins.

    Args:
        record: Record to classify
        state: Latches and previous participant name
        display_name: Resolved name of this record's participant
        fallback_label: Name used for an unnamed dispatch recipient
        default_origin: Farm region shown when the harvest record has none

    Returns:
        (state with claimed latch, stage); the owner memo is not advanced here
    """
    if not state.farm_shown and record.harvest_date:
        stage = FarmHarvest(
            origin=record.origin or default_origin,
            certificate_cid=record.vaccine_cert_cid,
        )
        return replace(state, farm_shown=True), stage

    if not state.slaughter_shown and record.slaughter_details:
        stage = Processing(
            details=record.slaughter_details,
            slaughter_date=record.slaughter_date,
            certificate_cid=record.halal_slaughter_cert_cid,
        )
        return replace(state, slaughter_shown=True), stage

    if not state.transform_shown and record.is_transformation:
        stage = Transformation(
            product_name=record.product_name,
            certificate_cid=record.halal_producer_cert_cid,
        )
        return replace(state, transform_shown=True), stage

    if record.normalized_status == STATUS_IN_TRANSIT:
        recipient = resolve_display_name(
            AssetRecord(owner_name=record.intended_owner_name),
            fallback=fallback_label,
        )
        return state, Dispatch(recipient=recipient)

    # RECEIVED and unknown statuses share the owner-continuity check
    if display_name != state.previous_name:
        return state, OwnershipAcceptance(owner=display_name)
    return state, LedgerUpdate()


def is_redundant_handover(
    event: CanonicalEvent,
    next_event: Optional[CanonicalEvent],
    transitional_org_codes: Iterable[str],
) -> bool:
    """
    True for a "received for processing" update immediately followed by
    the transformation it feeds; both land on the same instant.
    """
    if next_event is None or event.record.is_transformation:
        return False
    if not next_event.record.is_transformation:
        return False
    return event.record.current_owner_org in set(transitional_org_codes)


class StageClassifier:
    """
    Builds the provenance timeline from sorted canonical events.

    Holds configuration only; all pass state is local to ``classify``.
    """

    def __init__(
        self,
        transitional_org_codes: Optional[Sequence[str]] = None,
        link_builder: Optional[CertificateLinkBuilder] = None,
        fallback_label: Optional[str] = None,
        default_origin: str = DEFAULT_ORIGIN,
    ):
        """
        Args:
            transitional_org_codes: Org codes whose pre-transformation update is
                dropped (defaults to settings.transitional_org_codes; empty disables)
            link_builder: Certificate link builder (defaults to the configured gateway)
            fallback_label: Name for records without identity fields
            default_origin: Farm region shown when a harvest record has none
        """
        if transitional_org_codes is None:
            transitional_org_codes = settings.transitional_org_codes
        self.transitional_org_codes = frozenset(transitional_org_codes)
        self.link_builder = link_builder or CertificateLinkBuilder()
        self.fallback_label = fallback_label or settings.identity_fallback_label
        self.default_origin = default_origin

    def classify(self, events: Sequence[CanonicalEvent]) -> List[TimelineEvent]:
        """
        Classify a chronologically sorted event list.

        Args:
            events: Output of the normalizer, oldest first

        Returns:
            One timeline event per input event, minus redundant handovers
        """
        state = ClassifierState()
        timeline: List[TimelineEvent] = []
        suppressed = 0

        for index, event in enumerate(events):
            next_event = events[index + 1] if index + 1 < len(events) else None
            if is_redundant_handover(event, next_event, self.transitional_org_codes):
                suppressed += 1
                logger.debug(
                    "event_suppressed",
                    timestamp=event.timestamp.isoformat(),
                    owner_org=event.record.current_owner_org,
                )
                continue

            state, timeline_event = self.step(state, event)
            timeline.append(timeline_event)

        logger.info(
            "timeline_built",
            events=len(events),
            timeline_events=len(timeline),
            suppressed=suppressed,
            milestones=sum(1 for e in timeline if e.stage.is_milestone),
        )
        return timeline

    def step(self, state: ClassifierState, event: CanonicalEvent) -> Tuple[ClassifierState, TimelineEvent]:
        """Classify one surviving event and advance the owner memo."""
        display_name = resolve_display_name(event.record, fallback=self.fallback_label)
        state, stage = classify_record(
            event.record,
            state,
            display_name,
            fallback_label=self.fallback_label,
            default_origin=self.default_origin,
        )
        return replace(state, previous_name=display_name), self._render(stage, display_name, event)

    def _render(self, stage: Stage, display_name: str, event: CanonicalEvent) -> TimelineEvent:
        links = []
        if stage.certificate_label:
            link = self.link_builder.build(stage.certificate_cid, stage.certificate_label)
            if link is not None:
                links.append(link)

        return TimelineEvent(
            stage=stage.label,
            display_name=display_name,
            timestamp=event.timestamp,
            metadata=stage.metadata(),
            certificate_links=links,
        )
