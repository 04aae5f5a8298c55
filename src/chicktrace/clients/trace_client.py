"""
Ledger Trace Client

Queries the Fabric REST bridge for the full history of a batch, or
replays a saved bridge response.
"""
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import requests

from config.settings import settings
from src.chicktrace.exceptions import (
    LedgerLookupEmpty,
    LedgerLookupRejected,
    NonStructuredResponse,
    TransportFailure,
)
from src.chicktrace.utils.logger import get_logger

logger = get_logger(__name__)


class TraceClient:
    """
    Client for the ``/api/chicken/trace`` history query.

    The query either yields the complete raw history or raises; callers
    never see a partial list.
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[int] = None):
        """
        Initialize the trace client.

        Args:
            base_url: Override the history endpoint (for testing)
            timeout: Request timeout in seconds
        """
        self.base_url = base_url or settings.trace_api_url
        self.timeout = timeout or settings.trace_request_timeout
        self.session = requests.Session()
        logger.info("trace_client_initialized", base_url=self.base_url)

    def fetch_history(self, asset_id: str) -> List[Any]:
        """
        Fetch the raw history entries for an asset.

        Args:
            asset_id: Batch or product identifier

        Returns:
            Non-empty list of raw history envelopes

        Raises:
            TransportFailure: Request failed or returned a non-2xx status
            NonStructuredResponse: Body is not a JSON object with a data list
            LedgerLookupRejected: Bridge answered success = false
            LedgerLookupEmpty: Bridge returned no history
        """
        logger.info("trace_fetch_started", asset_id=asset_id)

        try:
            response = self.session.post(
                self.base_url,
                json={"batchId": asset_id},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(
                "trace_request_failed",
                asset_id=asset_id,
                error=str(e),
                error_type=type(e).__name__
            )
            raise TransportFailure(f"history query failed: {e}") from e

        if not response.ok:
            logger.warning("trace_request_rejected", asset_id=asset_id, status_code=response.status_code)
            raise TransportFailure(
                f"history query returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        data = self._extract_history(self._parse_body(response), asset_id)

        logger.info(
            "trace_fetch_complete",
            asset_id=asset_id,
            status_code=response.status_code,
            entries=len(data)
        )
        return data

    def load_history_file(self, path: Union[str, Path], asset_id: str) -> List[Any]:
        """
        Load a saved bridge response (or a bare history list) from disk.

        Args:
            path: JSON file written from a previous query
            asset_id: Identifier the history belongs to

        Returns:
            Non-empty list of raw history envelopes

        Raises:
            TransportFailure: File cannot be read
            NonStructuredResponse: File is not JSON, or not a response/list
            LedgerLookupRejected: Saved response has success = false
            LedgerLookupEmpty: Saved history is empty
        """
        logger.info("trace_replay_started", asset_id=asset_id, path=str(path))

        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            logger.error("trace_replay_unreadable", path=str(path), error=str(e))
            raise TransportFailure(f"cannot read history file {path}: {e}") from e

        try:
            body = json.loads(text)
        except json.JSONDecodeError as e:
            raise NonStructuredResponse(f"history file {path} is not valid JSON: {e.msg}") from e

        if isinstance(body, list):
            body = {"success": True, "data": body}
        if not isinstance(body, dict):
            raise NonStructuredResponse(f"expected a JSON object or list, got {type(body).__name__}")

        data = self._extract_history(body, asset_id)
        logger.info("trace_replay_complete", asset_id=asset_id, entries=len(data))
        return data

    def _extract_history(self, body: Dict[str, Any], asset_id: str) -> List[Any]:
        """Check ``success`` and return the non-empty ``data`` list."""
        if not body.get("success"):
            logger.warning("trace_lookup_rejected", asset_id=asset_id, message=body.get("message"))
            raise LedgerLookupRejected(f"ledger rejected lookup for {asset_id}")

        data = body.get("data")
        if data is None:
            data = []
        if not isinstance(data, list):
            raise NonStructuredResponse(f"expected data to be a list, got {type(data).__name__}")
        if not data:
            logger.warning("trace_lookup_empty", asset_id=asset_id)
            raise LedgerLookupEmpty(f"no history recorded for {asset_id}")
        return data

    def _parse_body(self, response: requests.Response) -> Dict[str, Any]:
        """Decode the JSON body and check it is an object."""
        try:
            body = response.json()
        except ValueError as e:
            logger.error("trace_response_unparseable", content_type=response.headers.get("Content-Type"))
            raise NonStructuredResponse("history query returned a non-JSON body") from e

        if not isinstance(body, dict):
            raise NonStructuredResponse(f"expected a JSON object, got {type(body).__name__}")
        return body
