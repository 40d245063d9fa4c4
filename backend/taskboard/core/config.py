"""Application settings loaded from the environment and an optional ``.env`` file."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "dev-only-jwt-secret-change-me-before-deploying"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = "development"

    database_url: str = "sqlite+aiosqlite:///./taskboard.db"
    # Create missing tables on startup; disable when schema is managed by alembic.
    db_auto_create: bool = True

    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_expire: str = "7d"
    jwt_algorithm: str = "HS256"

    allow_admin_signup: bool = True

    cors_origins: str = "*"
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 5000

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.environment.strip().lower() == "development"

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
