"""
Geospatial metrics for parcel boundaries.

Provides:
- Ring closure (first point repeated at the end)
- Equirectangular projection to a local planar system in meters
- Shoelace area in hectares
- Haversine perimeter in meters

The projection is a locally-flat approximation centered on the mean latitude
of the input. Errors grow with polygon extent and distance from the equator.
"""
import logging
import math
from typing import Sequence

import numpy as np

from parcel_capture.domain.models import GeoPoint

logger = logging.getLogger(__name__)

METERS_PER_DEGREE_LAT = 111_132.92
METERS_PER_DEGREE_LON_AT_EQUATOR = 111_412.84
EARTH_RADIUS_METERS = 6_371_000.0
SQUARE_METERS_PER_HECTARE = 10_000.0

MIN_POLYGON_POINTS = 3
MIN_PATH_POINTS = 2


def close_ring(points: Sequence[GeoPoint]) -> list[GeoPoint]:
    """
    Ensure a point sequence forms a closed ring.

    The first and last points are compared by exact coordinate equality.
    The input is never mutated.

    Args:
        points: Ordered boundary points

    Returns:
        The points with the first one appended at the end if it was not
        already repeated there
    """
    ring = list(points)
    if not ring:
        return ring
    if ring[0] != ring[-1]:
        ring.append(ring[0])
    return ring


def project_equirectangular(points: Sequence[GeoPoint]) -> tuple[np.ndarray, np.ndarray]:
    """
    Project lat/lon points onto a local planar coordinate system in meters.

    Args:
        points: Non-empty sequence of points

    Returns:
        Tuple of (x, y) arrays in meters
    """
    lats = np.array([p.latitude for p in points], dtype=float)
    lons = np.array([p.longitude for p in points], dtype=float)

    mean_lat_rad = math.radians(float(np.mean(lats)))
    meters_per_degree_lon = METERS_PER_DEGREE_LON_AT_EQUATOR * math.cos(mean_lat_rad)

    return lons * meters_per_degree_lon, lats * METERS_PER_DEGREE_LAT


def compute_area_hectares(points: Sequence[GeoPoint]) -> float:
    """
    Compute the enclosed area of a boundary in hectares.

    The ring is treated as closed whether or not the caller closed it:
    the shoelace sum wraps from the last vertex back to the first.

    Args:
        points: Ordered boundary points, open or closed

    Returns:
        Area in hectares, 0 when fewer than three points are given
    """
    if len(points) < MIN_POLYGON_POINTS:
        return 0.0

    xs, ys = project_equirectangular(points)
    next_xs = np.roll(xs, -1)
    next_ys = np.roll(ys, -1)

    # fsum keeps exactly-cancelling cross terms (collinear input) at 0
    twice_area = math.fsum(xs * next_ys - next_xs * ys)
    return abs(twice_area) / 2 / SQUARE_METERS_PER_HECTARE


def haversine_distance(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance in meters between two points."""
    lat1, lon1 = math.radians(a.latitude), math.radians(a.longitude)
    lat2, lon2 = math.radians(b.latitude), math.radians(b.longitude)

    h = (
        math.sin((lat2 - lat1) / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin((lon2 - lon1) / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_METERS * c


def compute_perimeter_meters(points: Sequence[GeoPoint]) -> float:
    """
    Sum great-circle distances between consecutive points.

    Does not wrap from the last point back to the first. Pass a closed ring
    to include the closing edge.

    Args:
        points: Ordered boundary points

    Returns:
        Path length in meters, 0 when fewer than two points are given
    """
    if len(points) < MIN_PATH_POINTS:
        return 0.0

    lats = np.radians([p.latitude for p in points])
    lons = np.radians([p.longitude for p in points])

    d_lat = np.diff(lats)
    d_lon = np.diff(lons)
    h = np.sin(d_lat / 2) ** 2 + np.cos(lats[:-1]) * np.cos(lats[1:]) * np.sin(d_lon / 2) ** 2
    c = 2 * np.arctan2(np.sqrt(h), np.sqrt(1 - h))

    perimeter = float(np.sum(EARTH_RADIUS_METERS * c))
    logger.debug(f"Perimeter over {len(points) - 1} segments: {perimeter:.2f}m")
    return perimeter
