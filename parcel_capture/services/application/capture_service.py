"""
Application service: Orchestration layer for parcel capture sessions.
"""
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
import logging
import uuid

from parcel_capture.config import settings
from parcel_capture.domain.models import DerivedStats, GeoPoint, Metrics
from parcel_capture.infrastructure.parcel_api_client import (
    ParcelAPIClient,
    ParcelAPIError,
    ParcelCreateRequest,
    PolygonGeometry,
    get_api_client,
)
from parcel_capture.services.domain.derived_estimates import compute_derived_stats
from parcel_capture.services.domain.parcel_draft_controller import (
    ParcelDraftController,
    compute_metrics,
)
from parcel_capture.utils.geojson import geojson_polygon_to_points, ring_to_geojson_polygon

logger = logging.getLogger(__name__)


class DraftNotFoundError(Exception):
    """No capture session exists for the given draft id."""

    def __init__(self, draft_id: str):
        super().__init__(f"Draft '{draft_id}' not found")
        self.draft_id = draft_id


@dataclass
class CaptureSession:
    """A single in-progress capture, owning its draft controller."""
    draft_id: str
    controller: ParcelDraftController = field(default_factory=ParcelDraftController)
    opened_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class SavedParcel:
    """Outcome of a successful save."""
    parcel: Any
    geometry: Dict[str, Any]
    area_hectares: float


class CaptureService:
    """
    Application service for parcel capture.

    Keeps one ParcelDraftController per open session and coordinates the
    save flow between the domain core and the persistence API. No business
    logic here, only coordination.
    """

    def __init__(
        self,
        api_client: ParcelAPIClient,
        session_ttl: Optional[timedelta] = None,
    ):
        """
        Initialize the service with dependencies.

        Args:
            api_client: Persistence API client used on save and listing
            session_ttl: Age after which an open draft is discarded
        """
        self.api_client = api_client
        self.session_ttl = session_ttl or timedelta(minutes=settings.draft_session_ttl_minutes)
        self._sessions: Dict[str, CaptureSession] = {}

    def _evict_expired(self) -> None:
        cutoff = datetime.now(timezone.utc) - self.session_ttl
        expired = [
            draft_id for draft_id, session in self._sessions.items()
            if session.opened_at < cutoff
        ]
        for draft_id in expired:
            del self._sessions[draft_id]
        if expired:
            logger.info(f"Evicted {len(expired)} expired drafts")

    def open_draft(self) -> CaptureSession:
        self._evict_expired()
        session = CaptureSession(draft_id=uuid.uuid4().hex)
        self._sessions[session.draft_id] = session
        logger.info(f"Opened draft {session.draft_id} ({len(self._sessions)} open)")
        return session

    def get_draft(self, draft_id: str) -> CaptureSession:
        """
        Look up an open session.

        Raises:
            DraftNotFoundError: If the session does not exist
        """
        self._evict_expired()
        session = self._sessions.get(draft_id)
        if session is None:
            raise DraftNotFoundError(draft_id)
        return session

    def cancel_draft(self, draft_id: str) -> None:
        """Discard a session and everything captured in it."""
        self.get_draft(draft_id)
        del self._sessions[draft_id]
        logger.info(f"Cancelled draft {draft_id}")

    def add_point(self, draft_id: str, point: GeoPoint) -> CaptureSession:
        session = self.get_draft(draft_id)
        session.controller.add_point(point)
        return session

    def clear_points(self, draft_id: str) -> CaptureSession:
        session = self.get_draft(draft_id)
        session.controller.clear()
        return session

    async def save_draft(
        self,
        draft_id: str,
        name: str,
        user_uid: Optional[str] = None,
        token: Optional[str] = None,
    ) -> SavedParcel:
        """
        Persist a draft and discard its session.

        This method orchestrates:
        1. Closing and validating the ring
        2. Building the GeoJSON payload
        3. Sending it to the persistence API
        4. Discarding the session, restored if the remote create fails

        Args:
            draft_id: Session identifier
            name: Parcel name chosen by the user
            user_uid: Owner identifier forwarded to the remote service
            token: Bearer token of the caller

        Returns:
            SavedParcel with the remote response and the stored geometry

        Raises:
            DraftNotFoundError: If the session does not exist
            ValidationError: If the draft cannot form a polygon
            ParcelAPIError: If the remote create fails
        """
        session = self.get_draft(draft_id)
        result = session.controller.prepare_for_save()

        geometry = ring_to_geojson_polygon(result.closed_ring_coordinates)

        request = ParcelCreateRequest(
            user_uid=user_uid,
            name=name,
            location=PolygonGeometry(**geometry),
            area_hectares=result.area_hectares,
            soil_type=settings.default_soil_type,
        )

        # Taken out of the registry before awaiting so a concurrent save of
        # the same draft finds nothing to send
        del self._sessions[draft_id]
        try:
            parcel = await self.api_client.create_parcel(request, token=token)
        except ParcelAPIError:
            self._sessions[draft_id] = session
            raise

        logger.info(f"Saved draft {draft_id} as '{name}' ({result.area_hectares:.2f} ha)")

        return SavedParcel(
            parcel=parcel,
            geometry=geometry,
            area_hectares=result.area_hectares,
        )

    async def list_parcels(self, token: Optional[str] = None) -> List[Dict[str, Any]]:
        return await self.api_client.list_parcels(token=token)

    async def get_parcel_weather(self, parcel_id: str, token: Optional[str] = None) -> Dict[str, Any]:
        return await self.api_client.get_parcel_weather(parcel_id, token=token)

    def parcel_statistics(self, geometry: Dict[str, Any]) -> tuple[Metrics, DerivedStats]:
        """
        Compute statistics for a stored parcel geometry.

        The stored ring is already closed, so the perimeter includes the
        closing edge. The repeated closing vertex is not counted as a point.

        Args:
            geometry: GeoJSON Polygon geometry

        Returns:
            Tuple of (metrics, derived estimates)
        """
        points = geojson_polygon_to_points(geometry)
        metrics = compute_metrics(points)
        if len(points) > 1 and points[0] == points[-1]:
            metrics = metrics.model_copy(update={"point_count": len(points) - 1})
        return metrics, compute_derived_stats(metrics)


# Singleton instance
_capture_service: Optional[CaptureService] = None


def get_capture_service() -> CaptureService:
    """
    Get or create the process-wide session registry.

    Returns:
        CaptureService instance
    """
    global _capture_service
    if _capture_service is None:
        _capture_service = CaptureService(api_client=get_api_client())
    return _capture_service
