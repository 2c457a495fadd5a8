"""
Unit tests for the parcel draft controller.

Tests cover:
- Recomputation on add and clear
- Live metrics on the open draft
- Save preparation and its validation failures
"""
import pytest

from parcel_capture.domain.exceptions import (
    DEGENERATE_POLYGON,
    INSUFFICIENT_POINTS,
    ValidationError,
)
from parcel_capture.domain.models import BoundaryState, GeoPoint
from parcel_capture.services.domain.derived_estimates import INSUFFICIENT_LABEL, VALID_LABEL
from parcel_capture.services.domain.parcel_draft_controller import ParcelDraftController
from parcel_capture.utils.geo_metrics import compute_area_hectares, compute_perimeter_meters


def _controller_with(points: list[GeoPoint]) -> ParcelDraftController:
    controller = ParcelDraftController()
    for point in points:
        controller.add_point(point)
    return controller


# ============================================================
# Live Metrics Tests
# ============================================================

class TestLiveMetrics:
    """Tests for metrics recomputed on every mutation."""

    def test_new_controller_has_zero_metrics(self):
        controller = ParcelDraftController()

        metrics = controller.current_metrics()

        assert metrics.point_count == 0
        assert metrics.area_hectares == 0
        assert metrics.perimeter_meters == 0
        assert controller.current_estimates().point_validity_label == INSUFFICIENT_LABEL
        assert controller.state == BoundaryState.EMPTY

    def test_metrics_follow_each_point(self, square_plot):
        controller = ParcelDraftController()

        for count, point in enumerate(square_plot, start=1):
            metrics = controller.add_point(point)
            assert metrics.point_count == count
            assert controller.current_metrics() == metrics

        assert controller.current_metrics().area_hectares == pytest.approx(1.2193, rel=1e-3)
        assert controller.current_estimates().point_validity_label == VALID_LABEL

    def test_live_perimeter_excludes_closing_edge(self, square_plot):
        controller = _controller_with(square_plot)

        assert controller.current_metrics().perimeter_meters == pytest.approx(
            compute_perimeter_meters(square_plot)
        )

    def test_estimates_track_metrics(self, square_plot):
        controller = _controller_with(square_plot)
        metrics = controller.current_metrics()
        estimates = controller.current_estimates()

        assert estimates.area_square_meters == pytest.approx(metrics.area_hectares * 10_000)
        assert estimates.estimated_plant_capacity == 122

    def test_clear_resets_and_starts_fresh(self, square_plot):
        controller = _controller_with(square_plot[:2])

        controller.clear()

        assert controller.current_metrics().point_count == 0
        assert controller.snapshot() == []

        controller.add_point(square_plot[3])

        assert controller.snapshot() == [square_plot[3]]
        assert controller.current_metrics().point_count == 1

    def test_metrics_and_estimates_are_read_only(self, square_plot):
        controller = _controller_with(square_plot)
        area = controller.current_metrics().area_hectares

        with pytest.raises(ValueError):
            controller.current_metrics().area_hectares = 999.0
        with pytest.raises(ValueError):
            controller.current_estimates().point_validity_label = "tampered"

        assert controller.current_metrics().area_hectares == area
        assert controller.current_estimates().point_validity_label == VALID_LABEL

    def test_snapshot_is_ordered_copy(self, square_plot):
        controller = _controller_with(square_plot)

        snapshot = controller.snapshot()
        snapshot.clear()

        assert controller.snapshot() == square_plot


# ============================================================
# Save Preparation Tests
# ============================================================

class TestPrepareForSave:
    """Tests for closing and validating the draft on save."""

    def test_closed_ring_coordinates_are_lon_lat(self, square_plot):
        controller = _controller_with(square_plot)

        result = controller.prepare_for_save()

        ring = result.closed_ring_coordinates
        assert len(ring) == 5
        assert ring[0] == [-84.0, 10.0]
        assert ring[0] == ring[-1]

    def test_area_matches_live_area(self, square_plot):
        controller = _controller_with(square_plot)

        result = controller.prepare_for_save()

        assert result.area_hectares == pytest.approx(
            controller.current_metrics().area_hectares, rel=1e-5
        )

    def test_does_not_close_the_draft(self, square_plot):
        controller = _controller_with(square_plot)

        controller.prepare_for_save()

        assert controller.snapshot() == square_plot
        assert controller.current_metrics().point_count == 4

    def test_already_closed_draft_is_not_closed_twice(self, square_plot):
        controller = _controller_with(square_plot + [square_plot[0]])

        result = controller.prepare_for_save()

        assert len(result.closed_ring_coordinates) == 5

    @pytest.mark.parametrize("count", [0, 1, 2])
    def test_insufficient_points(self, square_plot, count):
        controller = _controller_with(square_plot[:count])

        with pytest.raises(ValidationError) as exc_info:
            controller.prepare_for_save()

        assert exc_info.value.reason == INSUFFICIENT_POINTS
        assert str(exc_info.value) == "insufficient points"

    def test_collinear_points_are_degenerate(self, collinear_points):
        controller = _controller_with(collinear_points)

        assert controller.current_metrics().area_hectares == 0

        with pytest.raises(ValidationError, match=DEGENERATE_POLYGON):
            controller.prepare_for_save()

    def test_repeated_single_location_is_degenerate(self):
        point = GeoPoint(latitude=10.0, longitude=-84.0)
        controller = _controller_with([point, point, point])

        with pytest.raises(ValidationError, match="degenerate polygon"):
            controller.prepare_for_save()

    def test_can_keep_adding_after_valid(self, square_plot):
        controller = _controller_with(square_plot)
        controller.prepare_for_save()

        controller.add_point(square_plot[0])

        assert controller.current_metrics().point_count == 5

    def test_validation_error_is_a_value_error(self):
        assert issubclass(ValidationError, ValueError)

    def test_area_of_saved_ring_uses_closed_geometry(self, irregular_plot):
        controller = _controller_with(irregular_plot)

        result = controller.prepare_for_save()

        ring = [GeoPoint(latitude=lat, longitude=lon) for lon, lat in result.closed_ring_coordinates]
        assert result.area_hectares == compute_area_hectares(ring)
