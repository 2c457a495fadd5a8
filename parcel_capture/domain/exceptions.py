"""
Domain exceptions raised by the parcel capture core.
"""

INSUFFICIENT_POINTS = "insufficient points"
DEGENERATE_POLYGON = "degenerate polygon"


class ValidationError(ValueError):
    """A draft cannot be saved as it stands."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
