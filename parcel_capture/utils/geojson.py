"""
GeoJSON helpers for parcel geometry.
"""
from typing import Any, Sequence
from shapely.geometry import Polygon, mapping, shape

from parcel_capture.domain.models import GeoPoint


def ring_to_geojson_polygon(ring_coordinates: Sequence[Sequence[float]]) -> dict[str, Any]:
    """
    Build a GeoJSON Polygon geometry from a closed ring.

    Args:
        ring_coordinates: Closed ring as [longitude, latitude] pairs

    Returns:
        Dict of the form {"type": "Polygon", "coordinates": [[[lon, lat], ...]]}
    """
    geometry = mapping(Polygon(ring_coordinates))
    return {
        "type": geometry["type"],
        "coordinates": [
            [[float(lon), float(lat)] for lon, lat in ring]
            for ring in geometry["coordinates"]
        ],
    }


def geojson_polygon_to_points(geometry: dict[str, Any]) -> list[GeoPoint]:
    """
    Read the exterior ring of a stored GeoJSON Polygon as GeoPoints.

    Args:
        geometry: GeoJSON Polygon geometry

    Returns:
        Exterior ring points in stored order

    Raises:
        ValueError: If the geometry is not a Polygon
    """
    polygon = shape(geometry)
    if polygon.geom_type != "Polygon":
        raise ValueError(f"Expected a Polygon geometry, got {polygon.geom_type}")

    return [
        GeoPoint(latitude=lat, longitude=lon)
        for lon, lat in polygon.exterior.coords
    ]
