"""
API router for stored parcel endpoints.

Persistence API failures are not caught here; the error handling
middleware maps them to the upstream status.
"""
from fastapi import APIRouter, HTTPException
from typing import Any, Dict, List

from parcel_capture.api.dependencies import BearerTokenDep, CaptureServiceDep
from parcel_capture.api.v1.models.requests import PolygonGeometryRequest
from parcel_capture.api.v1.models.responses import StatisticsResponse


router = APIRouter(
    prefix="/parcels",
    tags=["parcels"],
)


@router.get(
    "",
    response_model=List[Any],
    summary="List the caller's parcels",
    responses={
        502: {"description": "Persistence API failure"},
    },
)
async def list_parcels(
    capture_service: CaptureServiceDep,
    token: BearerTokenDep,
) -> List[Any]:
    return await capture_service.list_parcels(token=token)


@router.get(
    "/{parcel_id}/weather",
    response_model=Dict[str, Any],
    summary="Current weather at a stored parcel",
    responses={
        502: {"description": "Persistence API failure"},
    },
)
async def parcel_weather(
    parcel_id: str,
    capture_service: CaptureServiceDep,
    token: BearerTokenDep,
) -> Dict[str, Any]:
    return await capture_service.get_parcel_weather(parcel_id, token=token)


@router.post(
    "/statistics",
    response_model=StatisticsResponse,
    summary="Compute statistics for a stored parcel",
    description="""
    Compute area, perimeter and derived estimates from a stored GeoJSON
    Polygon. The stored ring is closed, so the perimeter includes every edge
    and the repeated closing vertex is not counted as a point.
    """,
)
async def parcel_statistics(
    geometry: PolygonGeometryRequest,
    capture_service: CaptureServiceDep,
) -> StatisticsResponse:
    try:
        metrics, estimates = capture_service.parcel_statistics(geometry.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return StatisticsResponse(metrics=metrics, estimates=estimates)
