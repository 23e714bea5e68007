# 📄 File: app/shared/core/geo.py
# 🧭 Purpose (Layman Explanation):
# Describes a spot on the map and a postal address, the two ways the app talks about "where":
# where a restaurant is, where food goes, and where a rider currently is.
# 🧪 Purpose (Technical Summary):
# Pydantic value objects shared by all modules: GeoJSON Point with validated
# [longitude, latitude] coordinates, and a postal Address with optional coordinates.
# 🔗 Dependencies:
# pydantic, app.shared.utils.validators
# 🔄 Connected Modules / Calls From:
# users, restaurants, delivery partners, orders (delivery address and tracking)

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from app.shared.utils.validators import validate_coordinates


class GeoPoint(BaseModel):
    """GeoJSON point; coordinates are ``[longitude, latitude]``."""

    type: Literal["Point"] = "Point"
    coordinates: List[float]

    @field_validator("coordinates", mode="before")
    @classmethod
    def check_coordinates(cls, v):
        return validate_coordinates(v)

    @property
    def longitude(self) -> float:
        return self.coordinates[0]

    @property
    def latitude(self) -> float:
        return self.coordinates[1]


class Address(BaseModel):
    """Postal address."""

    street: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    zip_code: Optional[str] = Field(None, max_length=20)
    country: str = Field(default="India", max_length=100)
    coordinates: Optional[GeoPoint] = None
