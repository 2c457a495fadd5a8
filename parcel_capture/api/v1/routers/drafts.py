"""
API router for parcel draft (capture session) endpoints.
"""
from fastapi import APIRouter, HTTPException, Path, Request, status
from typing import Annotated

from parcel_capture.api.dependencies import BearerTokenDep, CaptureServiceDep
from parcel_capture.api.rate_limit import SAVE_RATE_LIMIT, limiter
from parcel_capture.api.v1.models.requests import SaveDraftRequest
from parcel_capture.api.v1.models.responses import (
    DraftResponse,
    SavedParcelResponse,
    StatisticsResponse,
)
from parcel_capture.domain.exceptions import ValidationError
from parcel_capture.domain.models import GeoPoint
from parcel_capture.infrastructure.parcel_api_client import ParcelAPIError
from parcel_capture.services.application.capture_service import DraftNotFoundError


router = APIRouter(
    prefix="/drafts",
    tags=["drafts"],
)

DraftId = Annotated[str, Path(description="Identifier of the capture session")]

NOT_FOUND_RESPONSE = {404: {"description": "Draft not found"}}


def _not_found(error: DraftNotFoundError) -> HTTPException:
    return HTTPException(status_code=404, detail=str(error))


@router.post(
    "",
    response_model=DraftResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Open a capture session",
)
async def open_draft(capture_service: CaptureServiceDep) -> DraftResponse:
    """Start an empty boundary draft."""
    session = capture_service.open_draft()
    return DraftResponse.from_session(session)


@router.get(
    "/{draft_id}",
    response_model=DraftResponse,
    summary="Get a draft",
    responses=NOT_FOUND_RESPONSE,
)
async def get_draft(
    draft_id: DraftId,
    capture_service: CaptureServiceDep,
) -> DraftResponse:
    try:
        session = capture_service.get_draft(draft_id)
    except DraftNotFoundError as e:
        raise _not_found(e)
    return DraftResponse.from_session(session)


@router.post(
    "/{draft_id}/points",
    response_model=DraftResponse,
    summary="Add a boundary point",
    description="""
    Append a point to the draft, from a map tap or the current device location.

    Points are never filtered: consecutive duplicates are accepted. Metrics and
    estimates are recomputed from the open (unclosed) draft, so the perimeter
    excludes the closing edge until the parcel is saved.
    """,
    responses=NOT_FOUND_RESPONSE,
)
async def add_point(
    draft_id: DraftId,
    point: GeoPoint,
    capture_service: CaptureServiceDep,
) -> DraftResponse:
    try:
        session = capture_service.add_point(draft_id, point)
    except DraftNotFoundError as e:
        raise _not_found(e)
    return DraftResponse.from_session(session)


@router.delete(
    "/{draft_id}/points",
    response_model=DraftResponse,
    summary="Clear all boundary points",
    responses=NOT_FOUND_RESPONSE,
)
async def clear_points(
    draft_id: DraftId,
    capture_service: CaptureServiceDep,
) -> DraftResponse:
    try:
        session = capture_service.clear_points(draft_id)
    except DraftNotFoundError as e:
        raise _not_found(e)
    return DraftResponse.from_session(session)


@router.get(
    "/{draft_id}/statistics",
    response_model=StatisticsResponse,
    summary="Get live draft statistics",
    responses=NOT_FOUND_RESPONSE,
)
async def get_statistics(
    draft_id: DraftId,
    capture_service: CaptureServiceDep,
) -> StatisticsResponse:
    try:
        session = capture_service.get_draft(draft_id)
    except DraftNotFoundError as e:
        raise _not_found(e)
    return StatisticsResponse(
        metrics=session.controller.current_metrics(),
        estimates=session.controller.current_estimates(),
    )


@router.post(
    "/{draft_id}/save",
    response_model=SavedParcelResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save the draft as a parcel",
    description="""
    Close the boundary ring, validate it and send it to the persistence API.

    The session is discarded once the parcel has been created.
    """,
    responses={
        404: {"description": "Draft not found"},
        422: {"description": "Insufficient points or degenerate polygon"},
        429: {"description": "Rate limit exceeded"},
        502: {"description": "Persistence API failure"},
    },
)
@limiter.limit(SAVE_RATE_LIMIT)
async def save_draft(
    request: Request,
    draft_id: DraftId,
    body: SaveDraftRequest,
    capture_service: CaptureServiceDep,
    token: BearerTokenDep,
) -> SavedParcelResponse:
    try:
        saved = await capture_service.save_draft(
            draft_id,
            name=body.name,
            user_uid=body.user_uid,
            token=token,
        )
    except DraftNotFoundError as e:
        raise _not_found(e)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.reason)
    except ParcelAPIError as e:
        raise HTTPException(
            status_code=502,
            detail=f"Failed to save parcel: {e.message}",
        )

    return SavedParcelResponse(
        parcel=saved.parcel,
        geometry=saved.geometry,
        area_hectares=saved.area_hectares,
    )


@router.delete(
    "/{draft_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Cancel a capture session",
    responses=NOT_FOUND_RESPONSE,
)
async def cancel_draft(
    draft_id: DraftId,
    capture_service: CaptureServiceDep,
) -> None:
    try:
        capture_service.cancel_draft(draft_id)
    except DraftNotFoundError as e:
        raise _not_found(e)
