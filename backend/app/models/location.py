"""
Location model.

Canonical geographic point shared by favorites and visit history.
Coordinates are an exact-match identity key: no tolerance is applied here.
"""
from sqlalchemy import Column, Integer, String, Float, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from app.models.base import Base, TimestampMixin

DEFAULT_COUNTRY = "Unknown"


class Location(Base, TimestampMixin):
    __tablename__ = "locations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    country = Column(String(100), nullable=False, default=DEFAULT_COUNTRY)
    state = Column(String(100))  # Province / administrative subdivision

    # Coordinates (degrees, signed)
    lat = Column(Float, nullable=False)
    lon = Column(Float, nullable=False)

    # Relationships
    favorites = relationship("FavoriteLocation", back_populates="location")
    history = relationship("LocationHistory", back_populates="location")

    __table_args__ = (
        UniqueConstraint("lat", "lon", name="uq_locations_coords"),
        Index("locations_coord_idx", "lat", "lon"),
        Index("locations_name_idx", "name"),
    )

    def __repr__(self):
        return f"<Location(id={self.id}, name='{self.name}', lat={self.lat}, lon={self.lon})>"

    @property
    def coords(self) -> tuple[float, float]:
        """Return (lat, lon) tuple."""
        return (self.lat, self.lon)
