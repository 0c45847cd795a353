"""Settings and configuration."""
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Security
    # 64 hex chars (32 bytes). Validated lazily by the master key loader so the
    # process can start and report a ConfigError instead of crashing on import.
    MASTER_KEY_HEX: Optional[str] = None

    # Storage
    DATABASE_URL: str = "sqlite:///./txvault.db"
    STORE_BACKEND: str = "postgres"  # postgres (any SQLAlchemy URL), memory

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    CORS_ORIGINS: List[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"

    DEV_MODE: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()
