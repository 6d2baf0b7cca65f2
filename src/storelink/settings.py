"""Application settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Etsy application
    etsy_api_key: str = ""
    oauth_redirect_uri: str = "http://localhost:4000/auth/callback"
    etsy_scopes: str = "shops_r listings_r"

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 4000

    # Sessions
    redis_url: str | None = None
    session_dir: str | None = None
    session_cookie_name: str = "etsy.sid"
    session_max_age: int = 60 * 60 * 24
    cookie_secure: bool = False

    # Outbound calls
    http_timeout: float = 15.0


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
