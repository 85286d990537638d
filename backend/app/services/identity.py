"""
Identity scoping for favorites and history.

An identity is an optional opaque string. None is the single shared
anonymous scope, which matches rows with a NULL user_id only.
"""
from typing import Optional


def normalize_user_id(user_id: Optional[str]) -> Optional[str]:
    """Blank identities collapse to the anonymous scope; others are kept verbatim."""
    if user_id is None:
        return None
    return user_id if user_id.strip() else None


def identity_filter(column, user_id: Optional[str]):
    """SQL criterion selecting rows owned by user_id (NULL rows when anonymous)."""
    if user_id is None:
        return column.is_(None)
    return column == user_id
