"""
Shared pytest fixtures for all tests.

This module provides common fixtures including:
- Sample boundary points (square plot, collinear line)
- Mock persistence API client
- Capture service wired to the mock client
- FastAPI test client
"""
import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from parcel_capture.main import app
from parcel_capture.api.dependencies import get_capture_service
from parcel_capture.domain.models import GeoPoint
from parcel_capture.infrastructure.parcel_api_client import ParcelAPIClient
from parcel_capture.services.application.capture_service import CaptureService


# ============================================================
# Sample Data Fixtures
# ============================================================

@pytest.fixture
def square_plot() -> list[GeoPoint]:
    """Four corners of a roughly 110m x 110m plot, open ring."""
    return [
        GeoPoint(latitude=10.0, longitude=-84.0),
        GeoPoint(latitude=10.0, longitude=-83.999),
        GeoPoint(latitude=10.001, longitude=-83.999),
        GeoPoint(latitude=10.001, longitude=-84.0),
    ]


@pytest.fixture
def collinear_points() -> list[GeoPoint]:
    """Three points on the same parallel."""
    return [
        GeoPoint(latitude=10.0, longitude=-84.0),
        GeoPoint(latitude=10.0, longitude=-83.999),
        GeoPoint(latitude=10.0, longitude=-83.998),
    ]


@pytest.fixture
def irregular_plot() -> list[GeoPoint]:
    """A six-vertex field boundary."""
    return [
        GeoPoint(latitude=9.9350, longitude=-84.0870),
        GeoPoint(latitude=9.9356, longitude=-84.0861),
        GeoPoint(latitude=9.9349, longitude=-84.0850),
        GeoPoint(latitude=9.9338, longitude=-84.0852),
        GeoPoint(latitude=9.9335, longitude=-84.0863),
        GeoPoint(latitude=9.9341, longitude=-84.0872),
    ]


# ============================================================
# Mock API Client Fixtures
# ============================================================

@pytest.fixture
def mock_api_client():
    """Create a mock persistence API client."""
    mock_client = AsyncMock(spec=ParcelAPIClient)
    mock_client.create_parcel.return_value = {"_id": "parcel-1", "nombre": "Lote norte"}
    mock_client.list_parcels.return_value = [
        {"_id": "parcel-1", "nombre": "Lote norte", "areaHectareas": 1.22},
    ]
    mock_client.get_parcel_weather.return_value = {"temperatura": 24.5, "humedad": 78}
    return mock_client


@pytest.fixture
def capture_service(mock_api_client) -> CaptureService:
    """Capture service backed by the mock client."""
    return CaptureService(api_client=mock_api_client)


# ============================================================
# FastAPI Test Client Fixtures
# ============================================================

@pytest.fixture
def test_client(capture_service) -> TestClient:
    """Synchronous test client with an isolated capture service."""
    app.dependency_overrides[get_capture_service] = lambda: capture_service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
