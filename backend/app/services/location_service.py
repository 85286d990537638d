"""Location registry - canonical geographic points keyed by exact coordinates."""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.models.location import Location, DEFAULT_COUNTRY
from app.schemas.location import LocationCreate

logger = logging.getLogger(__name__)


def find_location_by_coords(db: Session, lat: float, lon: float) -> Optional[Location]:
    """
    Exact-match lookup on (lat, lon).

    If a create race left more than one row for the same coordinates,
    the lowest id wins.
    """
    return (
        db.query(Location)
        .filter(Location.lat == lat, Location.lon == lon)
        .order_by(Location.id.asc())
        .first()
    )


def get_location_by_id(db: Session, location_id: int) -> Optional[Location]:
    return db.query(Location).filter(Location.id == location_id).first()


def create_location(db: Session, data: LocationCreate) -> Location:
    """
    Insert a location unconditionally.

    Duplicate checking is the caller's job; the (lat, lon) unique constraint
    surfaces as IntegrityError.
    """
    location = Location(
        name=data.name,
        country=data.country or DEFAULT_COUNTRY,
        state=data.state,
        lat=data.lat,
        lon=data.lon,
    )
    db.add(location)
    db.commit()
    db.refresh(location)

    logger.info("Created location %s (%s, %s) id=%s", location.name, location.lat, location.lon, location.id)
    return location
