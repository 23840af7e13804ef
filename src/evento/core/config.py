"""Configuration Management."""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="EVENTO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Server
    host: str = Field(default="0.0.0.0", description="HTTP bind address")
    port: int = Field(default=8080, gt=0, lt=65536, description="HTTP port")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"], description="Allowed CORS origins")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Caching
    enable_cache: bool = Field(default=True, description="Enable resolved tree caching")
    cache_size: int = Field(default=256, gt=0, description="Cache max size")
    cache_ttl: int = Field(default=3600, gt=0, description="Cache TTL (seconds)")

    # Validation
    max_payload_size: int = Field(default=256 * 1024, gt=0, description="Max data payload size (bytes)")
    max_data_depth: int = Field(default=20, gt=0, description="Max data payload nesting depth")
    max_template_nodes: int = Field(default=500, gt=0, description="Max nodes per template")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
