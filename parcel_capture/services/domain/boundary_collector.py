"""
Domain service: ordered point capture for one in-progress parcel.
"""
from typing import List
import logging

from parcel_capture.domain.models import BoundaryState, GeoPoint
from parcel_capture.utils.geo_metrics import MIN_POLYGON_POINTS

logger = logging.getLogger(__name__)


class BoundaryCollector:
    """
    Holds the ordered sequence of captured boundary points.

    Insertion order defines polygon winding and display order. Points are
    appended unconditionally; consecutive duplicates are legal. Closure is
    never stored here, so points can keep being added after the draft
    becomes valid.
    """

    def __init__(self):
        self._points: List[GeoPoint] = []

    @property
    def point_count(self) -> int:
        return len(self._points)

    @property
    def state(self) -> BoundaryState:
        if not self._points:
            return BoundaryState.EMPTY
        if len(self._points) < MIN_POLYGON_POINTS:
            return BoundaryState.OPEN
        return BoundaryState.VALID

    def add_point(self, point: GeoPoint) -> List[GeoPoint]:
        """
        Append a point to the draft.

        Args:
            point: The point to append

        Returns:
            Snapshot of the draft after the append
        """
        self._points.append(point)
        logger.debug(f"Point {len(self._points)} added at ({point.latitude}, {point.longitude})")
        return self.snapshot()

    def clear(self) -> List[GeoPoint]:
        """Discard every captured point."""
        self._points = []
        return self.snapshot()

    def snapshot(self) -> List[GeoPoint]:
        """Return a copy of the points that does not alias internal state."""
        return list(self._points)
