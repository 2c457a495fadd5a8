"""
Domain service: secondary agronomic estimates derived from parcel metrics.

Every figure is a pure function of Metrics and can be presented on its own.
The constants below are fixed domain assumptions, not runtime settings.
"""
import math

from parcel_capture.domain.models import DerivedStats, Metrics
from parcel_capture.utils.geo_metrics import MIN_POLYGON_POINTS, SQUARE_METERS_PER_HECTARE

# Headline displays round up with the short multiplier; detail displays
# use the precise one. Both are kept on purpose.
HEADLINE_ACRES_PER_HECTARE = 2.47
PRECISE_ACRES_PER_HECTARE = 2.471

USABLE_AREA_FRACTION = 0.8
PLANTS_PER_HECTARE = 100
WALKING_PACE_METERS_PER_MINUTE = 100
METERS_PER_KILOMETER = 1000

VALID_LABEL = "valid"
INSUFFICIENT_LABEL = "insufficient"


def area_square_meters(area_hectares: float) -> float:
    return area_hectares * SQUARE_METERS_PER_HECTARE


def headline_acres(area_hectares: float) -> int:
    """Whole acres, rounded up."""
    return math.ceil(area_hectares * HEADLINE_ACRES_PER_HECTARE)


def precise_acres(area_hectares: float) -> float:
    return area_hectares * PRECISE_ACRES_PER_HECTARE


def usable_area_hectares(area_hectares: float) -> float:
    """Area available for intensive cultivation."""
    return area_hectares * USABLE_AREA_FRACTION


def estimated_plant_capacity(area_hectares: float) -> int:
    return math.ceil(area_hectares * PLANTS_PER_HECTARE)


def estimated_traversal_minutes(perimeter_meters: float) -> int:
    """Minutes needed to walk the boundary at a fixed pace."""
    return math.ceil(perimeter_meters / WALKING_PACE_METERS_PER_MINUTE)


def perimeter_kilometers(perimeter_meters: float) -> float:
    return perimeter_meters / METERS_PER_KILOMETER


def point_validity_label(point_count: int) -> str:
    """Label driving whether a save is permitted upstream."""
    return VALID_LABEL if point_count >= MIN_POLYGON_POINTS else INSUFFICIENT_LABEL


def compute_derived_stats(metrics: Metrics) -> DerivedStats:
    """
    Compute every derived figure for a set of metrics.

    Args:
        metrics: Current parcel metrics

    Returns:
        DerivedStats instance
    """
    return DerivedStats(
        area_square_meters=area_square_meters(metrics.area_hectares),
        headline_acres=headline_acres(metrics.area_hectares),
        precise_acres=precise_acres(metrics.area_hectares),
        usable_area_hectares=usable_area_hectares(metrics.area_hectares),
        estimated_plant_capacity=estimated_plant_capacity(metrics.area_hectares),
        estimated_traversal_minutes=estimated_traversal_minutes(metrics.perimeter_meters),
        perimeter_kilometers=perimeter_kilometers(metrics.perimeter_meters),
        point_validity_label=point_validity_label(metrics.point_count),
    )
