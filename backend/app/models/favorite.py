"""
Favorite location model.

One row per (location, identity) pair. A NULL user_id is the shared
anonymous identity.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index, text
from sqlalchemy.orm import relationship

from app.models.base import Base, utcnow


class FavoriteLocation(Base):
    __tablename__ = "favorite_locations"

    id = Column(Integer, primary_key=True, index=True)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=False)
    user_id = Column(String(255))  # NULL = anonymous
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    location = relationship("Location", back_populates="favorites")

    __table_args__ = (
        Index("favorite_locations_location_idx", "location_id"),
        Index("favorite_locations_user_idx", "user_id"),
        # NULLs never collide in a plain unique index, so the anonymous
        # scope gets its own partial index.
        Index(
            "uq_favorite_locations_user",
            "location_id", "user_id",
            unique=True,
            sqlite_where=text("user_id IS NOT NULL"),
            postgresql_where=text("user_id IS NOT NULL"),
        ),
        Index(
            "uq_favorite_locations_anonymous",
            "location_id",
            unique=True,
            sqlite_where=text("user_id IS NULL"),
            postgresql_where=text("user_id IS NULL"),
        ),
    )

    def __repr__(self):
        return f"<FavoriteLocation(location_id={self.location_id}, user_id={self.user_id!r})>"
