"""
API request models using Pydantic.
"""
from typing import List, Literal, Optional
from pydantic import BaseModel, Field, field_validator

PARCEL_NAME_MAX_LENGTH = 50


class SaveDraftRequest(BaseModel):
    """Request body for saving a draft as a parcel."""
    name: str = Field(
        max_length=PARCEL_NAME_MAX_LENGTH,
        description="Parcel name, required and non-blank",
        examples=["Lote norte"]
    )
    user_uid: Optional[str] = Field(
        default=None,
        description="Owner identifier forwarded to the persistence API"
    )

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class PolygonGeometryRequest(BaseModel):
    """GeoJSON Polygon geometry of a stored parcel."""
    type: Literal["Polygon"] = "Polygon"
    coordinates: List[List[List[float]]] = Field(
        min_length=1,
        description="Rings of [longitude, latitude] pairs; only the exterior ring is used"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "type": "Polygon",
                "coordinates": [[
                    [-84.0, 10.0],
                    [-83.999, 10.0],
                    [-83.999, 10.001],
                    [-84.0, 10.001],
                    [-84.0, 10.0],
                ]],
            }
        }
