"""
Infrastructure layer: Parcel persistence API client with retry logic.
"""
from typing import List, Dict, Any, Optional
from pydantic import BaseModel, Field
import httpx
import logging
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from parcel_capture.config import settings
from parcel_capture.infrastructure.api_constants import APIConstants, ParcelAPIEndpoints

logger = logging.getLogger(__name__)


class PolygonGeometry(BaseModel):
    """GeoJSON Polygon geometry as stored by the remote service."""
    type: str = "Polygon"
    coordinates: List[List[List[float]]]


class ParcelCreateRequest(BaseModel):
    """Body of the create-parcel request, using the remote wire keys."""
    user_uid: Optional[str] = Field(default=None, alias="usuarioUid")
    name: str = Field(alias="nombre")
    location: PolygonGeometry = Field(alias="ubicacion")
    area_hectares: float = Field(alias="areaHectareas")
    soil_type: str = Field(alias="tipoSuelo")

    class Config:
        populate_by_name = True

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ParcelAPIError(Exception):
    """Custom exception for persistence API errors."""

    def __init__(self, message: str, status_code: int = 502):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ParcelAPIClient:
    """
    Client for the remote parcel persistence API.

    Reads are retried with exponential backoff on server and transport
    errors. Creates are sent once.
    """

    def __init__(self):
        """Initialize the API client with configuration."""
        self.base_url = settings.parcel_api_base_url
        self.default_token = settings.parcel_api_token
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "accept": APIConstants.CONTENT_TYPE_JSON,
            },
            timeout=APIConstants.DEFAULT_TIMEOUT,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    def _auth_headers(self, token: Optional[str]) -> Dict[str, str]:
        return {"Authorization": f"Bearer {token or self.default_token}"}

    async def _send(
        self,
        method: str,
        endpoint: str,
        **kwargs
    ) -> Any:
        """
        Send a single HTTP request.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint path
            **kwargs: Additional arguments for the request

        Returns:
            Decoded JSON response body

        Raises:
            httpx.HTTPStatusError: On 5xx responses, so callers may retry
            httpx.RequestError: On transport failures
            ParcelAPIError: On 4xx responses
        """
        try:
            response = await self.client.request(method, endpoint, **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            if e.response.status_code >= 500:
                raise
            raise ParcelAPIError(
                f"API request failed: {e.response.status_code} - {e.response.text}",
                status_code=e.response.status_code,
            )

    @retry(
        stop=stop_after_attempt(settings.max_retry_attempts),
        wait=wait_exponential(
            multiplier=settings.retry_backoff_multiplier,
            min=settings.retry_min_wait,
            max=settings.retry_max_wait,
        ),
        retry=retry_if_exception_type((httpx.HTTPStatusError, httpx.RequestError)),
        reraise=True,
    )
    async def _send_with_retry(
        self,
        method: str,
        endpoint: str,
        **kwargs
    ) -> Any:
        return await self._send(method, endpoint, **kwargs)

    async def _request(
        self,
        method: str,
        endpoint: str,
        retry_on_failure: bool,
        **kwargs
    ) -> Any:
        send = self._send_with_retry if retry_on_failure else self._send
        try:
            return await send(method, endpoint, **kwargs)
        except httpx.HTTPStatusError as e:
            raise ParcelAPIError(
                f"API request failed: {e.response.status_code} - {e.response.text}",
                status_code=e.response.status_code,
            )
        except httpx.RequestError as e:
            raise ParcelAPIError(f"API request error: {str(e)}")

    async def create_parcel(
        self,
        request: ParcelCreateRequest,
        token: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Persist a new parcel.

        Args:
            request: Parcel payload
            token: Bearer token of the caller

        Returns:
            The created parcel as returned by the remote service

        Raises:
            ParcelAPIError: If the request fails
        """
        logger.info(f"Creating parcel '{request.name}' ({request.area_hectares:.4f} ha)")
        return await self._request(
            "POST",
            ParcelAPIEndpoints.PARCELS,
            retry_on_failure=False,
            json=request.to_wire(),
            headers=self._auth_headers(token),
        )

    async def list_parcels(self, token: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Fetch the parcels owned by the caller.

        Args:
            token: Bearer token of the caller

        Returns:
            List of stored parcels

        Raises:
            ParcelAPIError: If the request fails
        """
        return await self._request(
            "GET",
            ParcelAPIEndpoints.USER_PARCELS,
            retry_on_failure=True,
            headers=self._auth_headers(token),
        )

    async def get_parcel_weather(
        self,
        parcel_id: str,
        token: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Fetch current weather at a stored parcel.

        Args:
            parcel_id: Identifier of the stored parcel
            token: Bearer token of the caller

        Returns:
            Weather payload as returned by the remote service

        Raises:
            ParcelAPIError: If the request fails
        """
        return await self._request(
            "GET",
            ParcelAPIEndpoints.PARCEL_WEATHER.format(parcel_id=parcel_id),
            retry_on_failure=True,
            headers=self._auth_headers(token),
        )


# Singleton instance
_api_client: Optional[ParcelAPIClient] = None


def get_api_client() -> ParcelAPIClient:
    """
    Get or create the singleton API client instance.

    Returns:
        ParcelAPIClient instance
    """
    global _api_client
    if _api_client is None:
        _api_client = ParcelAPIClient()
    return _api_client
