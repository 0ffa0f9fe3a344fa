"""
Configuration Management Module

Configures application parameters via environment variables or .env file.
Selects the document store backend and its connection parameters.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application Configuration Class

    All configuration items can be overridden by environment variables, with names matching fields (uppercase).
    """

    # Application Config
    APP_NAME: str = "Haste"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 7777

    # Storage Config
    # Backend used to persist documents
    STORAGE_TYPE: Literal["memory", "file", "database", "redis", "s3", "mongo"] = "file"
    # Directory for the file store
    STORAGE_PATH: str = "./data"
    # SQLAlchemy async URL for the database store (SQLite or PostgreSQL)
    DATABASE_URL: str = "sqlite+aiosqlite:///./haste.db"
    # Redis connection URL (only used when STORAGE_TYPE is "redis")
    REDIS_URL: str = "redis://localhost:6379/0"
    # Object storage target (only used when STORAGE_TYPE is "s3")
    S3_BUCKET: Optional[str] = None
    S3_REGION: Optional[str] = None
    # MongoDB connection (only used when STORAGE_TYPE is "mongo")
    MONGO_URL: str = "mongodb://localhost:27017"
    MONGO_DATABASE: str = "haste"

    # Expiration (seconds) applied to every stored document.
    # None or a non-positive value keeps documents forever.
    EXPIRE_SECONDS: Optional[int] = None

    # Key Generation Config
    KEY_LENGTH: int = Field(10, gt=0)
    # "phonetic" alternates consonants and vowels, "random" draws from KEY_SPACE
    KEY_GENERATOR: Literal["phonetic", "random"] = "phonetic"
    KEY_SPACE: str = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"

    # Maximum document length in characters (None disables the check)
    MAX_LENGTH: Optional[int] = 400000

    # Static documents loaded at startup, as a JSON object of key -> file path
    # Example: DOCUMENTS='{"about": "./about.md"}'
    DOCUMENTS: dict[str, str] = {}

    # Rate Limit Config
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_DEFAULT: str = "500/minute"

    # Expired document purge interval (minutes)
    EXPIRED_CLEANUP_INTERVAL_MINUTES: int = 60

    # Notification Config
    # Discord compatible webhook receiving {"content": "..."} messages
    NOTIFY_WEBHOOK_URL: Optional[str] = None
    # Webhook request timeout (seconds)
    HTTP_TIMEOUT: int = 10

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get application configuration (Singleton)

    Uses lru_cache to ensure configuration is loaded only once.

    Returns:
        Settings: Application configuration instance
    """
    return Settings()
