"""
Asset Record Data Models

Pydantic models for poultry batch records read back from the ledger.
"""
import json
from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AssetRecord(BaseModel):
    """
    One ledger state of a tracked poultry asset.

    Producers stamp camelCase keys; they are exposed here as snake_case
    attributes. Only the fields the narrative inspects are declared,
    everything else is kept in ``model_extra``.

    Attributes:
        enterprise_name: Enterprise stamped by the dashboard on each transaction
        company_name: Registered company of the submitting organization
        owner_name: Current owner's display name
        product_name: Retail product name
        product_weight: Product weight in kilograms
        product_description: Consumer-facing description
        harvest_date: Date the batch left the farm
        origin: Farm region
        growing_days: Days the flock was raised
        slaughter_details: Free-text slaughter narrative
        slaughter_date: Date of slaughter
        transformed_from_id: Parent asset this product was derived from
        is_final_product: Whether this asset is a retail SKU
        product_id: Product identifier
        status: Logistics status (IN_TRANSIT, RECEIVED, ...)
        intended_owner_name: Recipient of an in-flight transfer
        current_owner_org: MSP/organization code holding the asset
        vaccine_cert_cid: IPFS CID of the farm vaccination certificate
        halal_slaughter_cert_cid: IPFS CID of the halal slaughter certificate
        halal_producer_cert_cid: IPFS CID of the halal producer certificate
    """

    model_config = ConfigDict(
        extra="allow",
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    enterprise_name: Optional[str] = Field(None, alias="enterpriseName", description="Enterprise name")
    company_name: Optional[str] = Field(None, alias="companyName", description="Company name")
    owner_name: Optional[str] = Field(None, alias="ownerName", description="Owner name")

    product_name: Optional[str] = Field(None, alias="productName", description="Product name")
    product_weight: Optional[Union[int, float, str]] = Field(None, alias="productWeight", description="Weight in kg")
    product_description: Optional[str] = Field(None, alias="productDescription", description="Description")

    harvest_date: Optional[str] = Field(None, alias="harvestDate", description="Harvest date")
    origin: Optional[str] = Field(None, alias="origin", description="Farm region")
    growing_days: Optional[Union[int, float, str]] = Field(None, alias="growingDays", description="Growing days")

    slaughter_details: Optional[str] = Field(None, alias="slaughterDetails", description="Slaughter narrative")
    slaughter_date: Optional[str] = Field(None, alias="slaughterDate", description="Slaughter date")

    transformed_from_id: Optional[str] = Field(None, alias="transformedFromID", description="Parent asset ID")
    is_final_product: Optional[bool] = Field(None, alias="isFinalProduct", description="Retail SKU flag")
    product_id: Optional[str] = Field(None, alias="productID", description="Product ID")

    status: Optional[str] = Field(None, alias="status", description="Logistics status")
    intended_owner_name: Optional[str] = Field(None, alias="intendedOwnerName", description="Transfer recipient")
    current_owner_org: Optional[str] = Field(None, alias="currentOwnerOrg", description="Owner organization code")

    vaccine_cert_cid: Optional[str] = Field(None, alias="vaccineCertCID", description="Vaccine certificate CID")
    halal_slaughter_cert_cid: Optional[str] = Field(None, alias="halalSlaughterCertCID", description="Halal slaughter CID")
    halal_producer_cert_cid: Optional[str] = Field(None, alias="halalProducerCertCID", description="Halal producer CID")

    @field_validator(
        "enterprise_name", "company_name", "owner_name",
        "product_name", "product_description",
        "harvest_date", "origin",
        "slaughter_details", "slaughter_date",
        "transformed_from_id", "product_id",
        "status", "intended_owner_name", "current_owner_org",
        "vaccine_cert_cid", "halal_slaughter_cert_cid", "halal_producer_cert_cid",
        mode="before",
    )
    @classmethod
    def coerce_text(cls, v: Any) -> Optional[str]:
        """Producers disagree on scalar types; keep whatever they sent as text."""
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, (dict, list)):
            return json.dumps(v, sort_keys=True)
        return str(v)

    @field_validator("product_weight", "growing_days", mode="before")
    @classmethod
    def coerce_quantity(cls, v: Any) -> Optional[Union[int, float, str]]:
        """Keep numbers and text; structured quantities are kept as JSON text."""
        if v is None or isinstance(v, (int, float, str)):
            return v
        return json.dumps(v, sort_keys=True, default=str)

    @field_validator("is_final_product", mode="before")
    @classmethod
    def coerce_flag(cls, v: Any) -> Optional[bool]:
        """Accept stringified booleans and numeric flags."""
        if v is None or isinstance(v, bool):
            return v
        if isinstance(v, str):
            return v.strip().lower() in ("true", "1", "yes")
        if isinstance(v, (int, float)):
            return bool(v)
        return None

    @property
    def is_transformation(self) -> bool:
        """Record derives from a prior asset."""
        return bool(self.transformed_from_id)

    @property
    def normalized_status(self) -> str:
        """Status upper-cased, empty when absent."""
        return (self.status or "").upper()


class CanonicalEvent(BaseModel):
    """
    A normalized history entry: when it was committed and what it said.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(..., description="Commit time (timezone aware)")
    record: AssetRecord = Field(..., description="Ledger state at that time")
