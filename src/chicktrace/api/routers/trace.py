"""
Trace Router

Endpoints for consumer provenance lookups.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from src.chicktrace.api.dependencies import get_trace_service
from src.chicktrace.api.schemas import ErrorResponse
from src.chicktrace.models.timeline import TraceResult
from src.chicktrace.services.trace_service import TraceService

router = APIRouter(
    prefix="/api/v1/trace",
    tags=["trace"],
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)


@router.get("", response_model=TraceResult)
def trace_asset(
    id: Optional[str] = Query(None, description="Serial ID printed on the pack"),
    batch_id: Optional[str] = Query(None, alias="batchId"),
    product_id: Optional[str] = Query(None, alias="productId"),
    service: TraceService = Depends(get_trace_service),
):
    """
    Trace an asset identified by the QR code query string.

    Args:
        id: Serial ID (highest priority)
        batch_id: Batch identifier
        product_id: Product identifier
        service: Trace service

    Returns:
        Snapshot and timeline

    Raises:
        MissingIdentifier: 400 if no identifier was supplied
    """
    return service.trace_from_params({"id": id, "batchId": batch_id, "productId": product_id})


@router.get("/{asset_id}", response_model=TraceResult)
def trace_asset_by_path(
    asset_id: str,
    service: TraceService = Depends(get_trace_service),
):
    """
    Trace an asset by path identifier.
    """
    return service.trace(asset_id)
