"""Location, favorite and history schemas."""
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from app.schemas.common import CamelModel


class LocationCreate(CamelModel):
    """Raw location attributes supplied by the caller."""
    name: str = Field(..., min_length=1, max_length=255)
    country: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    lat: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    lon: float = Field(..., ge=-180, le=180, allow_inf_nan=False)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("country", "state")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value


class LocationRequest(LocationCreate):
    """Body of add-favorite / add-history requests."""
    user_id: Optional[str] = None


class Location(CamelModel):
    id: int
    name: str
    country: str
    state: Optional[str] = None
    lat: float
    lon: float
    created_at: datetime
    updated_at: datetime


class FavoriteLocation(CamelModel):
    id: int
    location_id: int
    user_id: Optional[str] = None
    created_at: datetime


class FavoriteAdded(CamelModel):
    location: Location
    favorite: FavoriteLocation


class FavoriteCheck(CamelModel):
    is_favorite: bool


class HistoryRecorded(CamelModel):
    location: Location
    success: bool = True
