"""
API Router - Aggregates all API endpoints.
"""
from fastapi import APIRouter

from app.api.v1 import locations, weather, insights

api_router = APIRouter()

# Favorites / history bookkeeping
api_router.include_router(locations.router, prefix="/locations", tags=["Locations"])

# Weather provider pass-through (cities, weather, air-pollution, config)
api_router.include_router(weather.router)

# Text generation
api_router.include_router(insights.router, prefix="/ai", tags=["AI"])
