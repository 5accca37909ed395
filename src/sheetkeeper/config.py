"""Configuration management for Sheetkeeper using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DATA_DIR = Path(__file__).parent / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="SHEETKEEPER_",
        extra="ignore",
    )

    # Server Settings
    host: str = Field(default="0.0.0.0", description="Authority server bind address")
    port: int = Field(default=8080, description="Authority server port")
    cors_origin: str = Field(
        default="http://localhost:5173",
        description="Origin allowed to call the authority from a browser",
    )
    welcome_message: str = Field(
        default="Sheetkeeper authority is running",
        description="Message returned by the health endpoint",
    )
    debug: bool = Field(default=False, description="Enable debug mode")

    # Client Settings
    server_url: str = Field(
        default="http://localhost:8080", description="Base URL of the authority server"
    )
    request_timeout: float | None = Field(
        default=None, description="Total request timeout in seconds (None = library default)"
    )
    local_recompute: bool = Field(
        default=False,
        description="Recompute derived sheet fields locally after every edit",
    )

    # Static data
    skills_file: Path = Field(default=DATA_DIR / "skills.yaml", description="Skill map YAML")
    catalog_file: Path = Field(default=DATA_DIR / "items.yaml", description="Item catalog YAML")
    character_file: Path = Field(
        default=DATA_DIR / "character.yaml", description="Seed character YAML"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level", alias="LOG_LEVEL")
    log_format: str = Field(
        default="console", description="Log format (console or json)", alias="LOG_FORMAT"
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
