from __future__ import annotations
"""server/creomotion/core/config.py
~~~~~~~~~~~~~~~~~~~~~~~~
Paramètres (pydantic-settings).
"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str = "postgresql+psycopg://postgres:postgres@db:5432/creomotion"
    DB_CONNECT_TIMEOUT: int = 5

    # Session JWT (cookie HttpOnly)
    JWT_SECRET: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_DAYS: int = 7
    SESSION_COOKIE_NAME: str = "auth-token"
    BCRYPT_ROUNDS: int = 12

    # "production" => cookie Secure
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    CORS_ALLOW_ORIGINS: Optional[str] = None

    # Celery / notifications
    REDIS_URL: str = "redis://redis:6379/0"
    CELERY_TASK_ALWAYS_EAGER: bool = False
    SLACK_WEBHOOK: Optional[str] = None
    NOTIFY_FROM_EMAIL: str = "noreply@creomotion.com"

    # Métier
    INVOICE_DEFAULT_PREFIX: str = "CM"
    DELIVERABLE_VERSION_RETRIES: int = 3

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.strip().lower() == "production"

    @property
    def session_max_age(self) -> int:
        """Durée de vie de la session en secondes (7 jours => 604800)."""
        return int(self.JWT_EXPIRES_DAYS) * 86400


settings = Settings()
