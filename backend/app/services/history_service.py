"""
Visit history ledger - one row per (location, identity), counting visits.

Recording a visit is an upsert: bump visit_count / last_visited in place,
insert only if no row exists yet.
"""
import logging
from typing import Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.models.base import utcnow
from app.models.history import LocationHistory
from app.models.location import Location
from app.services.identity import identity_filter, normalize_user_id

logger = logging.getLogger(__name__)


def get_location_history(
    db: Session,
    user_id: Optional[str] = None,
    limit: Optional[int] = None,
) -> list[Location]:
    """Visited locations for one identity, most recent first."""
    user_id = normalize_user_id(user_id)
    if limit is None:
        limit = get_settings().history_default_limit

    return (
        db.query(Location)
        .join(LocationHistory, LocationHistory.location_id == Location.id)
        .filter(identity_filter(LocationHistory.user_id, user_id))
        .order_by(LocationHistory.last_visited.desc(), LocationHistory.id.desc())
        .limit(limit)
        .all()
    )


def get_history_entry(
    db: Session,
    location_id: int,
    user_id: Optional[str] = None,
) -> Optional[LocationHistory]:
    user_id = normalize_user_id(user_id)
    return (
        db.query(LocationHistory)
        .filter(
            LocationHistory.location_id == location_id,
            identity_filter(LocationHistory.user_id, user_id),
        )
        .order_by(LocationHistory.id.asc())
        .first()
    )


def _increment_visit(db: Session, location_id: int, user_id: Optional[str]) -> int:
    """Bump an existing entry in the store; returns rows touched."""
    result = db.execute(
        update(LocationHistory)
        .where(
            LocationHistory.location_id == location_id,
            identity_filter(LocationHistory.user_id, user_id),
        )
        .values(
            visit_count=LocationHistory.visit_count + 1,
            last_visited=utcnow(),
        )
        .execution_options(synchronize_session=False)
    )
    return result.rowcount


def _current_entry(db: Session, location_id: int, user_id: Optional[str]) -> LocationHistory:
    """Re-read the entry before the visit transaction commits."""
    entry = get_history_entry(db, location_id, user_id)
    db.refresh(entry)
    return entry


def add_to_history(db: Session, location_id: int, user_id: Optional[str] = None) -> LocationHistory:
    """
    Record a visit: increment-or-create in a single transaction.

    The increment happens in SQL so concurrent visits never lose a count.
    If another request inserts the first row between our UPDATE and INSERT,
    the unique index rejects ours and we fall back to the increment.
    """
    user_id = normalize_user_id(user_id)

    try:
        if not _increment_visit(db, location_id, user_id):
            db.add(LocationHistory(
                location_id=location_id,
                user_id=user_id,
                visit_count=1,
                last_visited=utcnow(),
            ))
            db.flush()
        entry = _current_entry(db, location_id, user_id)
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(
            "Concurrent first visit for location_id=%s user_id=%r, incrementing instead",
            location_id, user_id,
        )
        try:
            if not _increment_visit(db, location_id, user_id):
                raise
            entry = _current_entry(db, location_id, user_id)
            db.commit()
        except Exception:
            db.rollback()
            raise
    except Exception:
        db.rollback()
        raise

    return entry


def clear_history(db: Session, user_id: Optional[str] = None) -> int:
    """Delete every history row in the identity's scope. Irreversible."""
    user_id = normalize_user_id(user_id)
    removed = (
        db.query(LocationHistory)
        .filter(identity_filter(LocationHistory.user_id, user_id))
        .delete(synchronize_session=False)
    )
    db.commit()

    logger.info("Cleared %d history row(s) for user_id=%r", removed, user_id)
    return removed
