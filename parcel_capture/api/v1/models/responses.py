"""
API response models using Pydantic.
"""
from typing import Any, Dict, List
from pydantic import BaseModel, Field

from parcel_capture.domain.models import BoundaryState, DerivedStats, GeoPoint, Metrics
from parcel_capture.services.application.capture_service import CaptureSession


class StatisticsResponse(BaseModel):
    """Metrics and derived estimates for a parcel."""
    metrics: Metrics
    estimates: DerivedStats


class DraftResponse(BaseModel):
    """Read-only view of an in-progress draft."""
    draft_id: str = Field(
        description="Identifier of the capture session"
    )
    state: BoundaryState = Field(
        description="empty, open (1-2 points) or valid (3 or more points)"
    )
    points: List[GeoPoint] = Field(
        description="Captured points in insertion order"
    )
    metrics: Metrics
    estimates: DerivedStats

    @classmethod
    def from_session(cls, session: CaptureSession) -> "DraftResponse":
        controller = session.controller
        return cls(
            draft_id=session.draft_id,
            state=controller.state,
            points=controller.snapshot(),
            metrics=controller.current_metrics(),
            estimates=controller.current_estimates(),
        )

    class Config:
        json_schema_extra = {
            "example": {
                "draft_id": "5f0c8c1d9a7e4b1f8f3a2d6c1e0b9a87",
                "state": "open",
                "points": [
                    {"latitude": 10.0, "longitude": -84.0},
                    {"latitude": 10.0, "longitude": -83.999},
                ],
                "metrics": {"area_hectares": 0.0, "perimeter_meters": 109.51, "point_count": 2},
                "estimates": {
                    "area_square_meters": 0.0,
                    "headline_acres": 0,
                    "precise_acres": 0.0,
                    "usable_area_hectares": 0.0,
                    "estimated_plant_capacity": 0,
                    "estimated_traversal_minutes": 2,
                    "perimeter_kilometers": 0.10951,
                    "point_validity_label": "insufficient",
                },
            }
        }


class SavedParcelResponse(BaseModel):
    """Response model for a saved parcel."""
    parcel: Any = Field(
        description="Parcel as returned by the persistence API"
    )
    geometry: Dict[str, Any] = Field(
        description="GeoJSON Polygon that was stored"
    )
    area_hectares: float
