"""
Ledger History Normalizer

Maps the producer-specific history envelopes returned by the ledger query
into canonical ``{timestamp, record}`` events, and orders them.

Envelope shapes seen in the wild::

    {"Timestamp": "...", "Value": "{\"productName\": ...}"}
    {"timestamp": {"seconds": 1718000000, "nanos": 0}, "Record": {...}}
    {"timestamp": "...", "record": {...}}
    {"timestamp": "...", "productName": ..., ...}      # entry is the payload
"""
import json
from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional

from pydantic import TypeAdapter, ValidationError

from src.chicktrace.exceptions import MalformedRecordEncoding, MalformedTimestamp
from src.chicktrace.models.asset_record import AssetRecord, CanonicalEvent
from src.chicktrace.utils.logger import get_logger

logger = get_logger(__name__)

# Precedence per logical field, first present wins
TIMESTAMP_KEYS = ("Timestamp", "timestamp")
PAYLOAD_KEYS = ("Value", "Record", "record")

_datetime_adapter = TypeAdapter(datetime)


def _first_present(entry: Mapping[str, Any], keys: Iterable[str]) -> Optional[Any]:
    for key in keys:
        value = entry.get(key)
        if value is not None and value != "":
            return value
    return None


def _protobuf_seconds(value: Any) -> int:
    """Fabric's node SDK serializes int64 seconds as a Long {low, high}."""
    if isinstance(value, Mapping):
        return (int(value.get("high", 0)) << 32) + (int(value.get("low", 0)) & 0xFFFFFFFF)
    return int(value)


def parse_timestamp(value: Any) -> datetime:
    """
    Parse a ledger commit time into a timezone-aware datetime.

    Accepts ISO-8601 text, epoch numbers, datetimes, and the protobuf
    ``{seconds, nanos}`` shape. Naive values are taken as UTC.

    Raises:
        MalformedTimestamp: If the value is missing or unparseable
    """
    if value is None:
        raise MalformedTimestamp("history entry carries no timestamp")

    try:
        if isinstance(value, Mapping) and "seconds" in value:
            seconds = _protobuf_seconds(value["seconds"])
            nanos = int(value.get("nanos") or 0)
            parsed = datetime.fromtimestamp(seconds + nanos / 1e9, tz=timezone.utc)
        else:
            parsed = _datetime_adapter.validate_python(value)
    except (ValidationError, ValueError, TypeError, OverflowError) as e:
        raise MalformedTimestamp(f"unparseable timestamp {value!r}") from e

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def decode_payload(payload: Any) -> Mapping[str, Any]:
    """
    Return the payload as a mapping, decoding it first if it is text.

    Raises:
        MalformedRecordEncoding: If text does not decode to a JSON object
    """
    if isinstance(payload, (bytes, bytearray)):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedRecordEncoding("record payload is not UTF-8 text") from e

    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as e:
            raise MalformedRecordEncoding(f"record payload is not valid JSON: {e.msg}") from e

    if not isinstance(payload, Mapping):
        raise MalformedRecordEncoding(
            f"record payload decoded to {type(payload).__name__}, expected an object"
        )
    return payload


def normalize_entry(entry: Any) -> CanonicalEvent:
    """
    Normalize one raw history entry.

    Args:
        entry: Envelope as returned by the ledger query

    Returns:
        Canonical event

    Raises:
        MalformedRecordEncoding: Payload is undecodable text
        MalformedTimestamp: No usable timestamp
    """
    if isinstance(entry, (str, bytes, bytearray)):
        entry = decode_payload(entry)
    if not isinstance(entry, Mapping):
        raise MalformedRecordEncoding(f"history entry is {type(entry).__name__}, expected an object")

    timestamp = parse_timestamp(_first_present(entry, TIMESTAMP_KEYS))

    payload = _first_present(entry, PAYLOAD_KEYS)
    if payload is None:
        payload = entry

    try:
        record = AssetRecord.model_validate(dict(decode_payload(payload)))
    except ValidationError as e:
        raise MalformedRecordEncoding(f"record payload failed validation: {e.error_count()} errors") from e

    return CanonicalEvent(timestamp=timestamp, record=record)


def sort_chronologically(events: Iterable[CanonicalEvent]) -> List[CanonicalEvent]:
    """
    Order events ascending by timestamp.

    The sort is stable: updates committed within the same clock tick keep
    their query order, which decides which record claims a milestone.
    """
    return sorted(events, key=lambda event: event.timestamp)


def normalize_history(entries: Iterable[Any]) -> List[CanonicalEvent]:
    """
    Normalize and chronologically sort a raw history list.

    Any malformed entry fails the whole history.
    """
    events = [normalize_entry(entry) for entry in entries]
    ordered = sort_chronologically(events)

    logger.debug(
        "history_normalized",
        entries=len(ordered),
        first=ordered[0].timestamp.isoformat() if ordered else None,
        last=ordered[-1].timestamp.isoformat() if ordered else None,
    )
    return ordered
