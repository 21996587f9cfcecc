"""
Pydantic Settings — centralized configuration loaded from environment variables.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Database ──────────────────────────────
    POSTGRES_USER: str = "reservations_user"
    POSTGRES_PASSWORD: str = "reservations_pass"
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "reservations_db"

    @property
    def DATABASE_URL(self) -> str:
        """Async URL for app runtime (asyncpg)."""
        return f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    # ── Redis / Celery ────────────────────────
    REDIS_URL: str = "redis://localhost:6379/0"
    CELERY_BROKER_URL: str = "redis://localhost:6379/0"
    CELERY_RESULT_BACKEND: str = "redis://localhost:6379/1"

    # ── Queue retry policy ────────────────────
    QUEUE_MAX_ATTEMPTS: int = 3
    QUEUE_BACKOFF_SECONDS: int = 5
    QUEUE_BACKOFF_MAX_SECONDS: int = 300

    # ── File Storage ──────────────────────────
    UPLOADS_DIR: str = "uploads"
    REPORTS_DIR: str = "reports"

    # ── Import pipeline ───────────────────────
    PROGRESS_INTERVAL: int = 100

    # Literal values accepted in the spreadsheet "status" column.
    RESERVATION_STATUS_PENDING: str = "pending"
    RESERVATION_STATUS_COMPLETED: str = "completed"
    RESERVATION_STATUS_CANCELLED: str = "cancelled"

    # ── Notifications ─────────────────────────
    NOTIFICATION_CHANNEL_PREFIX: str = "task"

    # ── Application ───────────────────────────
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    model_config = {"env_file": ["../.env", ".env"], "extra": "ignore"}


settings = Settings()
