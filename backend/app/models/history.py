"""
Location history model.

One row per (location, identity) pair; repeat visits bump visit_count
and last_visited instead of adding rows.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index, CheckConstraint, text
from sqlalchemy.orm import relationship

from app.models.base import Base, utcnow


class LocationHistory(Base):
    __tablename__ = "location_history"

    id = Column(Integer, primary_key=True, index=True)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=False)
    user_id = Column(String(255))  # NULL = anonymous
    visit_count = Column(Integer, nullable=False, default=1)
    last_visited = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    location = relationship("Location", back_populates="history")

    __table_args__ = (
        CheckConstraint("visit_count >= 1", name="ck_location_history_visit_count"),
        Index("location_history_location_idx", "location_id"),
        Index("location_history_user_idx", "user_id"),
        Index("location_history_last_visited_idx", "last_visited"),
        Index(
            "uq_location_history_user",
            "location_id", "user_id",
            unique=True,
            sqlite_where=text("user_id IS NOT NULL"),
            postgresql_where=text("user_id IS NOT NULL"),
        ),
        Index(
            "uq_location_history_anonymous",
            "location_id",
            unique=True,
            sqlite_where=text("user_id IS NULL"),
            postgresql_where=text("user_id IS NULL"),
        ),
    )

    def __repr__(self):
        return (
            f"<LocationHistory(location_id={self.location_id}, user_id={self.user_id!r}, "
            f"visit_count={self.visit_count})>"
        )
