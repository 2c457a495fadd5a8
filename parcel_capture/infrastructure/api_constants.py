"""
Parcel persistence API endpoint constants.

This module contains all remote endpoint paths and related constants.
Centralizing these values makes it easy to swap out endpoints or update API versions.
"""


class ParcelAPIEndpoints:
    """Persistence API endpoint paths."""

    PARCELS = "/parcelas"
    USER_PARCELS = f"{PARCELS}/usuario"
    PARCEL_WEATHER = f"{PARCELS}/{{parcel_id}}/clima"


class APIConstants:
    """General API configuration constants."""

    # HTTP Headers
    CONTENT_TYPE_JSON = "application/json"

    # Timeouts (in seconds)
    DEFAULT_TIMEOUT = 30.0
