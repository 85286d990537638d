"""Tests for the location registry."""
import pytest
from sqlalchemy.exc import IntegrityError

from app.models.location import DEFAULT_COUNTRY
from app.schemas.location import LocationCreate
from app.services import location_service


def make(name="Paris", country="FR", state=None, lat=48.8566, lon=2.3522):
    return LocationCreate(name=name, country=country, state=state, lat=lat, lon=lon)


def test_create_assigns_id_and_timestamps(db):
    location = location_service.create_location(db, make())

    assert location.id is not None
    assert location.name == "Paris"
    assert location.country == "FR"
    assert location.state is None
    assert location.created_at is not None
    assert location.updated_at is not None


def test_country_defaults_to_unknown(db):
    location = location_service.create_location(db, make(country=None))
    assert location.country == DEFAULT_COUNTRY

    blank = location_service.create_location(db, make(name="Elsewhere", country="  ", lat=1.0, lon=1.0))
    assert blank.country == DEFAULT_COUNTRY


def test_find_by_coords_is_exact_match(db):
    created = location_service.create_location(db, make())

    assert location_service.find_location_by_coords(db, 48.8566, 2.3522).id == created.id
    assert location_service.find_location_by_coords(db, 48.8567, 2.3522) is None
    assert location_service.find_location_by_coords(db, 48.8566, 2.3521) is None


def test_find_by_coords_distinguishes_sign(db):
    location_service.create_location(db, make(name="New York", country="US", lat=40.7128, lon=-74.0060))

    assert location_service.find_location_by_coords(db, 40.7128, 74.0060) is None
    assert location_service.find_location_by_coords(db, 40.7128, -74.0060).name == "New York"


def test_same_coordinates_rejected_by_store(db):
    location_service.create_location(db, make())

    with pytest.raises(IntegrityError):
        location_service.create_location(db, make(name="Paris again"))
    db.rollback()


def test_get_location_by_id(db):
    created = location_service.create_location(db, make())

    assert location_service.get_location_by_id(db, created.id).name == "Paris"
    assert location_service.get_location_by_id(db, created.id + 100) is None
