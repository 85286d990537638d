"""
Lookup facade - single entry point for favorites and history requests.

Resolves (or creates) the canonical Location for raw attributes, then
delegates to the favorites or history ledger. Stateless between calls.
"""
import logging
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import (
    AlreadyFavoritedError,
    DuplicateFavoriteError,
    DuplicateLocationError,
    InvalidLocationError,
)
from app.models.favorite import FavoriteLocation
from app.models.location import Location
from app.schemas.location import LocationCreate
from app.services import favorite_service, history_service, location_service
from app.services.identity import normalize_user_id

logger = logging.getLogger(__name__)

LocationAttrs = Union[LocationCreate, Mapping[str, Any]]


def parse_location(attrs: LocationAttrs) -> LocationCreate:
    """Validate raw attributes before touching the store."""
    if isinstance(attrs, LocationCreate):
        return attrs
    try:
        return LocationCreate.model_validate(dict(attrs))
    except ValidationError as e:
        raise InvalidLocationError(e.errors()) from e


def resolve_or_create_location(db: Session, attrs: LocationAttrs) -> Location:
    """
    Return the Location at these exact coordinates, creating it on a miss.

    A concurrent creator that wins the (lat, lon) unique constraint makes
    our insert fail; the existing row is returned instead.
    """
    data = parse_location(attrs)

    location = location_service.find_location_by_coords(db, data.lat, data.lon)
    if location:
        return location

    try:
        return location_service.create_location(db, data)
    except IntegrityError as e:
        db.rollback()
        location = location_service.find_location_by_coords(db, data.lat, data.lon)
        if location is None:
            raise DuplicateLocationError(data.lat, data.lon) from e
        logger.warning(
            "Location (%s, %s) created concurrently, reusing id=%s",
            data.lat, data.lon, location.id,
        )
        return location


def add_favorite(
    db: Session,
    attrs: LocationAttrs,
    user_id: Optional[str] = None,
) -> tuple[Location, FavoriteLocation]:
    """Resolve the location and favorite it; AlreadyFavoritedError on repeat."""
    user_id = normalize_user_id(user_id)
    location = resolve_or_create_location(db, attrs)

    if favorite_service.is_favorite(db, location.id, user_id):
        raise AlreadyFavoritedError(location, user_id)

    try:
        favorite = favorite_service.add_favorite(db, location.id, user_id)
    except DuplicateFavoriteError as e:
        logger.warning("Favorite for location_id=%s user_id=%r added concurrently", location.id, user_id)
        raise AlreadyFavoritedError(location, user_id) from e

    return location, favorite


def remove_favorite(db: Session, location_id: int, user_id: Optional[str] = None) -> None:
    favorite_service.remove_favorite(db, location_id, user_id)


def is_favorite(db: Session, location_id: int, user_id: Optional[str] = None) -> bool:
    return favorite_service.is_favorite(db, location_id, user_id)


def list_favorites(db: Session, user_id: Optional[str] = None) -> list[Location]:
    return favorite_service.get_favorite_locations(db, user_id)


def record_visit(db: Session, attrs: LocationAttrs, user_id: Optional[str] = None) -> Location:
    """Resolve the location and count a visit to it."""
    location = resolve_or_create_location(db, attrs)
    history_service.add_to_history(db, location.id, user_id)
    return location


def list_history(
    db: Session,
    user_id: Optional[str] = None,
    limit: Optional[int] = None,
) -> list[Location]:
    return history_service.get_location_history(db, user_id, limit)


def clear_history(db: Session, user_id: Optional[str] = None) -> None:
    history_service.clear_history(db, user_id)
