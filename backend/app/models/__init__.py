"""
SQLAlchemy models for the weather dashboard.

Location is the root entity; favorites and history reference it.
"""
from app.models.base import Base
from app.models.location import Location
from app.models.favorite import FavoriteLocation
from app.models.history import LocationHistory

__all__ = [
    "Base",
    "Location",
    "FavoriteLocation",
    "LocationHistory",
]
