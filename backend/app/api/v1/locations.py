"""
Locations API endpoints.

Favorites and visit history for the dashboard. The userId query/body
field is optional; omitting it uses the shared anonymous scope.

Handlers are plain `def` so FastAPI runs them in its thread pool and a
database round trip never blocks other requests.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.core.exceptions import AlreadyFavoritedError
from app.db.session import get_db
from app.schemas.common import SuccessResponse
from app.schemas.location import (
    FavoriteAdded,
    FavoriteCheck,
    FavoriteLocation,
    HistoryRecorded,
    Location,
    LocationRequest,
)
from app.services import location_service, lookup_service

router = APIRouter()


@router.get("/favorites", response_model=list[Location])
def list_favorites(
    user_id: Optional[str] = Query(None, alias="userId"),
    db: Session = Depends(get_db),
):
    """Favorite locations, newest first."""
    return lookup_service.list_favorites(db, user_id)


@router.post("/favorites", response_model=FavoriteAdded)
def add_favorite(
    request: LocationRequest,
    db: Session = Depends(get_db),
):
    """Resolve the location and add it to favorites."""
    try:
        location, favorite = lookup_service.add_favorite(db, request, request.user_id)
    except AlreadyFavoritedError:
        raise HTTPException(status_code=409, detail="Location already in favorites")
    return FavoriteAdded(
        location=Location.model_validate(location),
        favorite=FavoriteLocation.model_validate(favorite),
    )


@router.get("/favorites/check", response_model=FavoriteCheck)
def check_favorite(
    location_id: int = Query(..., alias="locationId"),
    user_id: Optional[str] = Query(None, alias="userId"),
    db: Session = Depends(get_db),
):
    return FavoriteCheck(is_favorite=lookup_service.is_favorite(db, location_id, user_id))


@router.delete("/favorites/{location_id}", response_model=SuccessResponse)
def remove_favorite(
    location_id: int,
    user_id: Optional[str] = Query(None, alias="userId"),
    db: Session = Depends(get_db),
):
    """Remove a favorite. Removing a missing favorite still succeeds."""
    lookup_service.remove_favorite(db, location_id, user_id)
    return SuccessResponse()


@router.get("/history", response_model=list[Location])
def list_history(
    user_id: Optional[str] = Query(None, alias="userId"),
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
):
    """Recently viewed locations, most recent first."""
    return lookup_service.list_history(db, user_id, limit)


@router.post("/history", response_model=HistoryRecorded)
def add_history(
    request: LocationRequest,
    db: Session = Depends(get_db),
):
    """Record a visit to a location."""
    location = lookup_service.record_visit(db, request, request.user_id)
    return HistoryRecorded(location=Location.model_validate(location))


@router.delete("/history", response_model=SuccessResponse)
def clear_history(
    user_id: Optional[str] = Query(None, alias="userId"),
    db: Session = Depends(get_db),
):
    lookup_service.clear_history(db, user_id)
    return SuccessResponse(message="Location history cleared")


@router.get("/{location_id}", response_model=Location)
def get_location(
    location_id: int,
    db: Session = Depends(get_db),
):
    location = location_service.get_location_by_id(db, location_id)
    if not location:
        raise HTTPException(status_code=404, detail="Location not found")
    return location
