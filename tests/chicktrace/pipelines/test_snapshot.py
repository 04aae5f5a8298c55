"""
Unit tests for snapshot module
"""
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[3]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.chicktrace.exceptions import EmptyHistory
from src.chicktrace.models.asset_record import AssetRecord, CanonicalEvent
from src.chicktrace.pipelines.snapshot import (
    DEFAULT_DESCRIPTION,
    DEFAULT_PRODUCT_NAME,
    build_snapshot,
    select_current_state,
)
from src.chicktrace.transformers.certificate_links import CertificateLinkBuilder

BASE = datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
def link_builder():
    return CertificateLinkBuilder(gateway_base="https://ipfs.test/ipfs")


class TestSelectCurrentState:
    """Tests for select_current_state"""

    def test_returns_last_record(self):
        """Test the newest event is the current state"""
        events = [
            CanonicalEvent(timestamp=BASE + timedelta(minutes=i), record=AssetRecord(product_name=name))
            for i, name in enumerate(["old", "new"])
        ]

        assert select_current_state(events).product_name == "new"

    def test_empty_history_raises(self):
        """Test EmptyHistory on no events"""
        with pytest.raises(EmptyHistory):
            select_current_state([])


class TestBuildSnapshot:
    """Tests for build_snapshot"""

    def test_full_record(self, link_builder):
        """Test header fields and badge order"""
        record = AssetRecord.model_validate({
            "productName": "Chicken Breast 500g",
            "productWeight": 0.5,
            "enterpriseName": "Ayam Processing",
            "ownerName": "Retailer",
            "productDescription": "Skinless fillets",
            "halalProducerCertCID": "QmProducer",
            "vaccineCertCID": "QmVaccine",
            "halalSlaughterCertCID": "undefined",
        })

        snapshot = build_snapshot(record, "SKU-42", link_builder=link_builder)

        assert snapshot.product_name == "Chicken Breast 500g"
        assert snapshot.product_weight == 0.5
        assert snapshot.weight_display == "0.5 kg"
        assert snapshot.producer_display_name == "Ayam Processing"
        assert snapshot.product_description == "Skinless fillets"
        assert snapshot.asset_id == "SKU-42"
        assert [link.label for link in snapshot.certificate_links] == ["Health Cert", "Halal Process"]
        assert snapshot.certificate_links[1].uri == "https://ipfs.test/ipfs/QmProducer"

    def test_defaults(self, link_builder):
        """Test placeholders for an empty record"""
        snapshot = build_snapshot(AssetRecord(owner_name="Farm1"), "B-1", link_builder=link_builder)

        assert snapshot.product_name == DEFAULT_PRODUCT_NAME
        assert snapshot.weight_display == "Variable"
        assert snapshot.producer_display_name == "Verified Farm"
        assert snapshot.product_description == DEFAULT_DESCRIPTION
        assert snapshot.certificate_links == []

    def test_company_name_as_producer(self, link_builder):
        """Test producer falls back to companyName"""
        snapshot = build_snapshot(AssetRecord(company_name="GV Holdings"), "B-1", link_builder=link_builder)

        assert snapshot.producer_display_name == "GV Holdings"
