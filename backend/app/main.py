"""
Weather Dashboard - Main FastAPI Application

Backend for the weather dashboard: favorites and visit history for
locations, plus pass-through access to the weather and text-generation
providers.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import get_settings
from app.api.v1.router import api_router
from app.core.exceptions import (
    DuplicateFavoriteError,
    DuplicateLocationError,
    InvalidLocationError,
    ProviderNotConfiguredError,
    UpstreamNotFoundError,
    UpstreamUnavailableError,
)
from app.core.logging_config import configure_logging
from app.services.weather_service import close_weather_client

settings = get_settings()
configure_logging(settings.log_level)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_weather_client()


app = FastAPI(
    title=settings.project_name,
    description="""
    Weather Dashboard API

    - **Locations**: favorites and recently viewed history
    - **Weather**: current conditions, forecast, air quality, alerts, geocoding
    - **AI**: natural-language weather insights
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.backend_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router
app.include_router(api_router, prefix=settings.api_prefix)


@app.exception_handler(InvalidLocationError)
async def invalid_location_handler(request: Request, exc: InvalidLocationError):
    return JSONResponse(status_code=422, content={"detail": exc.errors})


@app.exception_handler(DuplicateLocationError)
@app.exception_handler(DuplicateFavoriteError)
async def duplicate_handler(request: Request, exc: Exception):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(ProviderNotConfiguredError)
async def provider_not_configured_handler(request: Request, exc: ProviderNotConfiguredError):
    logger.warning("%s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.exception_handler(UpstreamNotFoundError)
async def upstream_not_found_handler(request: Request, exc: UpstreamNotFoundError):
    return JSONResponse(status_code=404, content={"detail": "Not found"})


@app.exception_handler(UpstreamUnavailableError)
async def upstream_unavailable_handler(request: Request, exc: UpstreamUnavailableError):
    logger.error("%s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.get("/")
async def root():
    """Root endpoint - system status."""
    return {
        "system": settings.project_name,
        "status": "operational",
        "version": __version__,
        "providers": {
            "weather": "online" if settings.openweather_api_key else "unconfigured",
            "insights": "online" if settings.openai_api_key else "unconfigured",
        },
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
