"""
Application configuration using pydantic-settings.
"""
from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite:///./weather.db"

    # Environment
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # API
    api_prefix: str = "/api"
    project_name: str = "Weather Dashboard"

    # Weather provider (OpenWeatherMap)
    openweather_api_key: str = ""
    openweather_base_url: str = "https://api.openweathermap.org"
    provider_timeout: float = 15.0

    # Text generation (OpenAI)
    openai_api_key: str = ""
    openai_model: str = "gpt-3.5-turbo"
    insight_max_tokens: int = 300
    insight_temperature: float = 0.7

    # History
    history_default_limit: int = 10

    # CORS
    backend_cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:5000",
        "http://localhost:3000",
    ]

    class Config:
        env_file = "../.env"  # Load from project root
        extra = "ignore"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
