"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from docqa.configs.base import BaseSettings
from docqa.configs.celery_config import CelerySettings
from docqa.configs.database import DatabaseSettings
from docqa.configs.rag import RAGSettings
from docqa.configs.s3_documents import S3DocumentsSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    database: DatabaseSettings = DatabaseSettings()
    rag: RAGSettings = RAGSettings()
    s3_documents: S3DocumentsSettings = S3DocumentsSettings()
    celery: CelerySettings = CelerySettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from docqa.configs import get_settings
        settings = get_settings()
    """
    return Settings()
