"""
Dependency injection for FastAPI.
"""
from typing import Annotated, Optional
from fastapi import Depends, Header

from parcel_capture.services.application.capture_service import (
    CaptureService,
    get_capture_service,
)


def get_bearer_token(
    authorization: Annotated[Optional[str], Header()] = None,
) -> Optional[str]:
    """
    Extract the caller's bearer token, if any.

    Args:
        authorization: Raw Authorization header

    Returns:
        The token without its scheme, or None
    """
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


# Type aliases for cleaner route signatures
CaptureServiceDep = Annotated[CaptureService, Depends(get_capture_service)]
BearerTokenDep = Annotated[Optional[str], Depends(get_bearer_token)]
