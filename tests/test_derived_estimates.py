"""
Unit tests for derived agronomic estimates.
"""
import pytest

from parcel_capture.domain.models import Metrics
from parcel_capture.services.domain.derived_estimates import (
    INSUFFICIENT_LABEL,
    VALID_LABEL,
    compute_derived_stats,
    estimated_plant_capacity,
    estimated_traversal_minutes,
    headline_acres,
    point_validity_label,
    precise_acres,
    usable_area_hectares,
)


class TestDerivedEstimates:
    """Tests for each derived figure."""

    def test_headline_acres_rounds_up(self):
        assert headline_acres(1.0) == 3  # 2.47
        assert headline_acres(0.0) == 0
        assert isinstance(headline_acres(0.5), int)

    def test_precise_acres_keeps_decimals(self):
        assert precise_acres(1.0) == pytest.approx(2.471)
        assert precise_acres(2.0) == pytest.approx(4.942)

    def test_headline_and_precise_acres_differ(self):
        assert headline_acres(1.2) != precise_acres(1.2)

    def test_usable_area(self):
        assert usable_area_hectares(2.5) == pytest.approx(2.0)

    def test_plant_capacity_rounds_up(self):
        assert estimated_plant_capacity(1.2193) == 122
        assert estimated_plant_capacity(0.0) == 0

    def test_traversal_minutes_rounds_up(self):
        assert estimated_traversal_minutes(441.4) == 5
        assert estimated_traversal_minutes(100.0) == 1
        assert estimated_traversal_minutes(0.0) == 0

    @pytest.mark.parametrize("area,perimeter", [
        (0.0, 0.0),
        (0.0001, 0.3),
        (1.2193, 441.4),
        (250.75, 6400.01),
    ])
    def test_integer_estimates_are_non_negative_ints(self, area, perimeter):
        capacity = estimated_plant_capacity(area)
        minutes = estimated_traversal_minutes(perimeter)

        assert isinstance(capacity, int) and capacity >= 0
        assert isinstance(minutes, int) and minutes >= 0

    @pytest.mark.parametrize("count,label", [
        (0, INSUFFICIENT_LABEL),
        (2, INSUFFICIENT_LABEL),
        (3, VALID_LABEL),
        (40, VALID_LABEL),
    ])
    def test_point_validity_label(self, count, label):
        assert point_validity_label(count) == label


class TestComputeDerivedStats:
    """Tests for the combined derived statistics."""

    def test_all_figures_from_metrics(self):
        metrics = Metrics(area_hectares=1.5, perimeter_meters=520.0, point_count=5)

        stats = compute_derived_stats(metrics)

        assert stats.area_square_meters == pytest.approx(15_000)
        assert stats.headline_acres == 4
        assert stats.precise_acres == pytest.approx(3.7065)
        assert stats.usable_area_hectares == pytest.approx(1.2)
        assert stats.estimated_plant_capacity == 150
        assert stats.estimated_traversal_minutes == 6
        assert stats.perimeter_kilometers == pytest.approx(0.52)
        assert stats.point_validity_label == VALID_LABEL

    def test_empty_metrics(self):
        stats = compute_derived_stats(
            Metrics(area_hectares=0.0, perimeter_meters=0.0, point_count=0)
        )

        assert stats.headline_acres == 0
        assert stats.estimated_plant_capacity == 0
        assert stats.estimated_traversal_minutes == 0
        assert stats.point_validity_label == INSUFFICIENT_LABEL
