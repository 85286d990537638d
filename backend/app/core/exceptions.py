"""
Domain exceptions for location bookkeeping and provider access.

The API layer maps these to HTTP responses in app.main.
"""
from typing import Optional


class LocationServiceError(Exception):
    """Base class for location registry / ledger errors."""


class InvalidLocationError(LocationServiceError):
    """Raw location attributes failed validation (no store round trip made)."""

    def __init__(self, errors: list):
        self.errors = errors
        super().__init__(f"Invalid location attributes: {errors}")


class AlreadyFavoritedError(LocationServiceError):
    """The (location, identity) pair is already a favorite."""

    def __init__(self, location, user_id: Optional[str] = None):
        self.location = location
        self.user_id = user_id
        super().__init__("Location already in favorites")


class DuplicateLocationError(LocationServiceError):
    """A location row for these exact coordinates already exists."""

    def __init__(self, lat: float, lon: float):
        self.lat = lat
        self.lon = lon
        super().__init__(f"Location already exists at ({lat}, {lon})")


class DuplicateFavoriteError(LocationServiceError):
    """Store-level uniqueness violation on favorite_locations."""

    def __init__(self, location_id: int, user_id: Optional[str] = None):
        self.location_id = location_id
        self.user_id = user_id
        super().__init__(f"Favorite already exists for location {location_id}")


class ProviderError(Exception):
    """Base class for external provider (weather / text generation) errors."""


class ProviderNotConfiguredError(ProviderError):
    """No API key is configured for the provider."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"{provider} API key not configured")


class UpstreamUnavailableError(ProviderError):
    """The provider returned an error status or could not be reached."""

    def __init__(self, provider: str, status_code: Optional[int] = None, message: str = ""):
        self.provider = provider
        self.status_code = status_code
        detail = message or (f"{provider} API error: {status_code}" if status_code else f"{provider} unavailable")
        super().__init__(detail)


class UpstreamNotFoundError(ProviderError):
    """The provider answered 404 for the requested city / location."""
