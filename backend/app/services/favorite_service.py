"""Favorites ledger - saved (location, identity) pairs."""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import DuplicateFavoriteError
from app.models.favorite import FavoriteLocation
from app.models.location import Location
from app.services.identity import identity_filter, normalize_user_id

logger = logging.getLogger(__name__)


def get_favorite_locations(db: Session, user_id: Optional[str] = None) -> list[Location]:
    """Favorited locations for one identity, newest favorite first."""
    user_id = normalize_user_id(user_id)
    return (
        db.query(Location)
        .join(FavoriteLocation, FavoriteLocation.location_id == Location.id)
        .filter(identity_filter(FavoriteLocation.user_id, user_id))
        .order_by(FavoriteLocation.created_at.desc(), FavoriteLocation.id.desc())
        .all()
    )


def add_favorite(db: Session, location_id: int, user_id: Optional[str] = None) -> FavoriteLocation:
    """
    Insert a favorite without re-checking for an existing one.

    Raises DuplicateFavoriteError if the store rejects the row as a duplicate.
    """
    user_id = normalize_user_id(user_id)
    favorite = FavoriteLocation(location_id=location_id, user_id=user_id)
    db.add(favorite)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if is_favorite(db, location_id, user_id):
            raise DuplicateFavoriteError(location_id, user_id) from e
        raise
    db.refresh(favorite)

    logger.info("Added favorite location_id=%s user_id=%r", location_id, user_id)
    return favorite


def remove_favorite(db: Session, location_id: int, user_id: Optional[str] = None) -> int:
    """Delete matching favorites. Removing a missing favorite is a no-op."""
    user_id = normalize_user_id(user_id)
    removed = (
        db.query(FavoriteLocation)
        .filter(
            FavoriteLocation.location_id == location_id,
            identity_filter(FavoriteLocation.user_id, user_id),
        )
        .delete(synchronize_session=False)
    )
    db.commit()

    logger.info("Removed %d favorite(s) location_id=%s user_id=%r", removed, location_id, user_id)
    return removed


def is_favorite(db: Session, location_id: int, user_id: Optional[str] = None) -> bool:
    user_id = normalize_user_id(user_id)
    favorite_id = (
        db.query(FavoriteLocation.id)
        .filter(
            FavoriteLocation.location_id == location_id,
            identity_filter(FavoriteLocation.user_id, user_id),
        )
        .first()
    )
    return favorite_id is not None
