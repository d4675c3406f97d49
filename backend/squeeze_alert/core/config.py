"""
Application Configuration

All settings loaded from environment variables.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "Squeeze Alert"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    # CORS (the demo endpoint is public)
    allowed_origins: list[str] = ["*"]

    # Dashboard static files
    static_dir: str = "web/static"

    # Demo indicator parameters (served by /api/data)
    demo_bb_length: int = 20
    demo_bb_mult: float = 2.0
    demo_kc_length: int = 20
    demo_kc_mult: float = 1.5
    demo_use_true_range: bool = True
    demo_min_volatility: float = 0.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
