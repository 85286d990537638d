"""Pydantic schemas for API request/response validation."""
from app.schemas.location import (
    Location,
    LocationCreate,
    LocationRequest,
    FavoriteLocation,
    FavoriteAdded,
    FavoriteCheck,
    HistoryRecorded,
)
from app.schemas.common import SuccessResponse

__all__ = [
    "Location", "LocationCreate", "LocationRequest",
    "FavoriteLocation",
    "FavoriteAdded", "FavoriteCheck", "HistoryRecorded",
    "SuccessResponse",
]
