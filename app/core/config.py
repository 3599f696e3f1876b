"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    project_name: str = "Teacher Dashboard API"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Relational store (any SQLAlchemy URL, SQLite by default)
    database_url: str = "sqlite:///./students.db"
    database_echo: bool = False

    # JWT Auth
    jwt_secret_key: str = "teacher-dashboard-secret-key-change-me"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440
    jwt_leeway_seconds: int = 30

    # Bootstrap account, seeded into an empty users table
    admin_username: str = "admin"
    admin_password: str = "admin123"

    # CORS, comma separated (the desktop shell loads the UI from a local origin)
    cors_origins: str = "*"

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
