"""
Domain service: orchestration of one parcel capture session.

Owns the BoundaryCollector for a single draft and recomputes metrics and
derived estimates from the live (unclosed) points after every mutation.
One controller exists per capture session; cancelling a session is simply
discarding its controller.
"""
from typing import Optional, Sequence
import logging

from parcel_capture.domain.exceptions import (
    DEGENERATE_POLYGON,
    INSUFFICIENT_POINTS,
    ValidationError,
)
from parcel_capture.domain.models import (
    BoundaryState,
    DerivedStats,
    GeoPoint,
    Metrics,
    SaveResult,
)
from parcel_capture.services.domain.boundary_collector import BoundaryCollector
from parcel_capture.services.domain.derived_estimates import compute_derived_stats
from parcel_capture.utils.geo_metrics import (
    MIN_POLYGON_POINTS,
    close_ring,
    compute_area_hectares,
    compute_perimeter_meters,
)

logger = logging.getLogger(__name__)


def compute_metrics(points: Sequence[GeoPoint]) -> Metrics:
    """
    Compute area, perimeter and point count for a point sequence.

    Args:
        points: Ordered boundary points, open or closed

    Returns:
        Metrics instance
    """
    return Metrics(
        area_hectares=compute_area_hectares(points),
        perimeter_meters=compute_perimeter_meters(points),
        point_count=len(points),
    )


class ParcelDraftController:
    """
    Read/write facade over a boundary draft.

    Metrics and estimates are recomputed in full on every add/clear; there
    is no incremental update.
    """

    def __init__(self, collector: Optional[BoundaryCollector] = None):
        self._collector = collector or BoundaryCollector()
        self._recompute()

    @property
    def state(self) -> BoundaryState:
        return self._collector.state

    def add_point(self, point: GeoPoint) -> Metrics:
        """
        Append a point and recompute.

        Args:
            point: Point captured by tap or by the location provider

        Returns:
            Metrics after the append
        """
        self._collector.add_point(point)
        self._recompute()
        return self._metrics

    def clear(self) -> Metrics:
        """Discard all points and recompute."""
        self._collector.clear()
        self._recompute()
        logger.info("Draft cleared")
        return self._metrics

    def snapshot(self) -> list[GeoPoint]:
        """Ordered copy of the current points, for map display."""
        return self._collector.snapshot()

    def current_metrics(self) -> Metrics:
        return self._metrics

    def current_estimates(self) -> DerivedStats:
        return self._estimates

    def prepare_for_save(self) -> SaveResult:
        """
        Close the ring and produce the geometry to persist.

        Returns:
            SaveResult with [lon, lat] ring coordinates and area in hectares

        Raises:
            ValidationError: If there are fewer than three points, or the
                closed ring encloses no area
        """
        points = self._collector.snapshot()
        if len(points) < MIN_POLYGON_POINTS:
            logger.warning(f"Save rejected: {len(points)} points")
            raise ValidationError(INSUFFICIENT_POINTS)

        ring = close_ring(points)
        area_hectares = compute_area_hectares(ring)
        if area_hectares == 0:
            logger.warning(f"Save rejected: {len(points)} points enclose no area")
            raise ValidationError(DEGENERATE_POLYGON)

        logger.info(f"Draft ready to save: {len(ring)} ring vertices, {area_hectares:.4f} ha")
        return SaveResult(
            closed_ring_coordinates=[[p.longitude, p.latitude] for p in ring],
            area_hectares=area_hectares,
        )

    def _recompute(self) -> None:
        self._metrics = compute_metrics(self._collector.snapshot())
        self._estimates = compute_derived_stats(self._metrics)
        logger.debug(
            f"Recomputed metrics: points={self._metrics.point_count}, "
            f"area={self._metrics.area_hectares:.4f}ha, "
            f"perimeter={self._metrics.perimeter_meters:.2f}m"
        )
