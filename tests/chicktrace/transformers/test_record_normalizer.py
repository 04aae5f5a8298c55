"""
Unit tests for record_normalizer module
"""
import json
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[3]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.chicktrace.exceptions import MalformedRecordEncoding, MalformedTimestamp
from src.chicktrace.models.asset_record import AssetRecord, CanonicalEvent
from src.chicktrace.transformers.record_normalizer import (
    normalize_entry,
    normalize_history,
    parse_timestamp,
    sort_chronologically,
)

BASE = datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc)


class TestNormalizeEntry:
    """Tests for envelope normalization"""

    def test_capitalized_timestamp_wins(self):
        """Test that Timestamp takes precedence over timestamp"""
        entry = {
            "Timestamp": "2024-03-01T08:00:00Z",
            "timestamp": "2024-03-09T08:00:00Z",
            "Value": {"ownerName": "Farm1"},
        }

        event = normalize_entry(entry)

        assert event.timestamp == BASE

    def test_lowercase_timestamp_used_when_capitalized_is_null(self):
        """Test fallback to timestamp when Timestamp is null"""
        entry = {"Timestamp": None, "timestamp": "2024-03-01T08:00:00Z", "record": {}}

        event = normalize_entry(entry)

        assert event.timestamp == BASE

    def test_value_wins_over_record(self):
        """Test payload precedence Value -> Record -> record"""
        entry = {
            "timestamp": "2024-03-01T08:00:00Z",
            "Value": {"ownerName": "from-value"},
            "Record": {"ownerName": "from-Record"},
            "record": {"ownerName": "from-record"},
        }

        assert normalize_entry(entry).record.owner_name == "from-value"

    def test_capitalized_record_wins_over_lowercase(self):
        """Test Record is preferred to record"""
        entry = {
            "timestamp": "2024-03-01T08:00:00Z",
            "Record": {"ownerName": "from-Record"},
            "record": {"ownerName": "from-record"},
        }

        assert normalize_entry(entry).record.owner_name == "from-Record"

    def test_bare_entry_is_the_payload(self):
        """Test an entry without payload keys is itself the record"""
        entry = {"timestamp": "2024-03-01T08:00:00Z", "productName": "Whole Chicken", "harvestDate": "2024-02-28"}

        record = normalize_entry(entry).record

        assert record.product_name == "Whole Chicken"
        assert record.harvest_date == "2024-02-28"

    def test_text_payload_is_decoded(self):
        """Test that a JSON-encoded Value is parsed"""
        entry = {
            "Timestamp": "2024-03-01T08:00:00Z",
            "Value": json.dumps({"enterpriseName": "Green Valley Farm", "productWeight": 1.8}),
        }

        record = normalize_entry(entry).record

        assert record.enterprise_name == "Green Valley Farm"
        assert record.product_weight == 1.8

    def test_undecodable_text_payload_raises(self):
        """Test invalid JSON text raises MalformedRecordEncoding"""
        entry = {"timestamp": "2024-03-01T08:00:00Z", "Value": "{not json"}

        with pytest.raises(MalformedRecordEncoding):
            normalize_entry(entry)

    def test_text_payload_that_is_not_an_object_raises(self):
        """Test JSON text decoding to a list is rejected"""
        entry = {"timestamp": "2024-03-01T08:00:00Z", "Value": "[1, 2, 3]"}

        with pytest.raises(MalformedRecordEncoding):
            normalize_entry(entry)

    def test_unknown_fields_pass_through(self):
        """Test forward compatibility with fields the classifier ignores"""
        entry = {"timestamp": "2024-03-01T08:00:00Z", "Value": {"feedSupplier": "Agro Feeds", "ownerName": "Farm1"}}

        record = normalize_entry(entry).record

        assert record.model_extra["feedSupplier"] == "Agro Feeds"

    def test_structured_quantities_are_kept(self):
        """Test object or list weights and growing days do not fail the record"""
        entry = {
            "timestamp": "2024-03-07T10:00:00Z",
            "Value": {"productWeight": {"value": 2, "unit": "kg"}, "growingDays": [42]},
        }

        record = normalize_entry(entry).record

        assert json.loads(record.product_weight) == {"value": 2, "unit": "kg"}
        assert record.growing_days == "[42]"

    def test_missing_timestamp_raises(self):
        """Test an envelope without any timestamp is rejected"""
        with pytest.raises(MalformedTimestamp):
            normalize_entry({"Value": {"ownerName": "Farm1"}})


class TestParseTimestamp:
    """Tests for commit time parsing"""

    def test_iso_text(self):
        """Test ISO-8601 with Z suffix"""
        assert parse_timestamp("2024-03-01T08:00:00Z") == BASE

    def test_naive_text_is_utc(self):
        """Test naive values are taken as UTC"""
        parsed = parse_timestamp("2024-03-01T08:00:00")

        assert parsed.tzinfo is not None
        assert parsed == BASE

    def test_protobuf_seconds_and_nanos(self):
        """Test Fabric {seconds, nanos} timestamps"""
        seconds = int(BASE.timestamp())

        parsed = parse_timestamp({"seconds": seconds, "nanos": 500_000_000})

        assert parsed == BASE + timedelta(milliseconds=500)

    def test_protobuf_long_seconds(self):
        """Test node SDK Long encoding of seconds"""
        seconds = int(BASE.timestamp())

        assert parse_timestamp({"seconds": {"low": seconds, "high": 0}, "nanos": 0}) == BASE

    def test_garbage_raises(self):
        """Test unparseable text raises MalformedTimestamp"""
        with pytest.raises(MalformedTimestamp):
            parse_timestamp("yesterday-ish")

    def test_malformed_timestamp_is_a_record_encoding_error(self):
        """Test error hierarchy"""
        assert issubclass(MalformedTimestamp, MalformedRecordEncoding)


class TestSortChronologically:
    """Tests for chronological ordering"""

    @staticmethod
    def _event(minutes: int, name: str) -> CanonicalEvent:
        return CanonicalEvent(
            timestamp=BASE + timedelta(minutes=minutes),
            record=AssetRecord(product_name=name),
        )

    def test_sort_is_stable_for_equal_timestamps(self):
        """Test [(5,A), (3,B), (5,C)] sorts to B, A, C"""
        events = [self._event(5, "A"), self._event(3, "B"), self._event(5, "C")]

        ordered = sort_chronologically(events)

        assert [e.record.product_name for e in ordered] == ["B", "A", "C"]

    def test_normalize_history_sorts_mixed_envelopes(self):
        """Test normalization and ordering together"""
        entries = [
            {"timestamp": "2024-03-03T08:00:00Z", "record": {"productName": "third"}},
            {"Timestamp": "2024-03-01T08:00:00Z", "Value": json.dumps({"productName": "first"})},
            {"timestamp": "2024-03-02T08:00:00Z", "productName": "second"},
        ]

        ordered = normalize_history(entries)

        assert [e.record.product_name for e in ordered] == ["first", "second", "third"]

    def test_normalize_history_empty(self):
        """Test an empty history normalizes to an empty list"""
        assert normalize_history([]) == []
