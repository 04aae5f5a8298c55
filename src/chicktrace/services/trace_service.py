"""
Trace lookup service: fetch, normalize, snapshot and classify one asset.
"""
from __future__ import annotations

from typing import Any, List, Mapping, Optional

from src.chicktrace.clients.trace_client import TraceClient
from src.chicktrace.exceptions import MissingIdentifier, TraceError
from src.chicktrace.models.timeline import TraceResult
from src.chicktrace.pipelines.snapshot import build_snapshot, select_current_state
from src.chicktrace.pipelines.stage_classifier import StageClassifier
from src.chicktrace.transformers.certificate_links import CertificateLinkBuilder
from src.chicktrace.transformers.record_normalizer import normalize_history
from src.chicktrace.utils.logger import get_logger

logger = get_logger(__name__)

IDENTIFIER_KEYS = ("id", "batchId", "productId")


def resolve_asset_id(params: Mapping[str, Any]) -> str:
    """
    Pick the asset identifier from lookup parameters (id, batchId, productId).

    Raises:
        MissingIdentifier: If none is present
    """
    for key in IDENTIFIER_KEYS:
        value = params.get(key)
        if value is None:
            continue
        value = str(value).strip()
        if value:
            return value
    raise MissingIdentifier("no id, batchId or productId supplied")


class TraceService:
    def __init__(
        self,
        client: Optional[TraceClient] = None,
        classifier: Optional[StageClassifier] = None,
        link_builder: Optional[CertificateLinkBuilder] = None,
    ):
        self.client = client or TraceClient()
        self.link_builder = link_builder or CertificateLinkBuilder()
        self.classifier = classifier or StageClassifier(link_builder=self.link_builder)

    def trace(self, asset_id: str) -> TraceResult:
        """
        Build the full trace for an asset, or raise a TraceError.

        Nothing is built until the whole history has been fetched.
        """
        try:
            raw_history = self.client.fetch_history(asset_id)
            return self.build(asset_id, raw_history)
        except TraceError as e:
            logger.warning(
                "trace_lookup_failed",
                asset_id=asset_id,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise

    def build(self, asset_id: str, raw_history: List[Any]) -> TraceResult:
        """Reconcile an already fetched raw history."""
        events = normalize_history(raw_history)
        current = select_current_state(events)

        result = TraceResult(
            asset_id=asset_id,
            snapshot=build_snapshot(current, asset_id, link_builder=self.link_builder),
            timeline=self.classifier.classify(events),
        )
        logger.info(
            "trace_lookup_complete",
            asset_id=asset_id,
            history_entries=len(events),
            timeline_events=len(result.timeline),
        )
        return result

    def trace_from_params(self, params: Mapping[str, Any]) -> TraceResult:
        return self.trace(resolve_asset_id(params))
