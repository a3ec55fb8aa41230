from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Storage
    STORE_BACKEND: str = Field("sql", description="Durable store backend: sql, redis or memory")
    DATABASE_URL: str = Field(
        "sqlite+aiosqlite:///./driving_test.db",
        description="Async SQLAlchemy connection string (sqlite+aiosqlite://... or postgresql+asyncpg://...)"
    )
    REDIS_URL: str = Field("redis://localhost:6379/0")
    STORE_KEY_PREFIX: str = Field("", description="Optional namespace prepended to every store key")
    USER_ID: Optional[str] = Field(None, description="Local account id used to scope progress keys")

    # Session presets
    PRACTICE_QUESTION_COUNT: int = 10
    EXAM_QUESTION_COUNT: int = 40
    EXAM_TIME_LIMIT_MINUTES: int = 45  # shown to the user, not enforced
    DAILY_CHALLENGE_QUESTION_COUNT: int = 5
    PASS_THRESHOLD: int = 70

    # Progress
    WEEKLY_SERIES_DAYS: int = 7
    RECENT_RESULTS_LIMIT: int = 5

    # Environment
    ENV: str = "production"  # development, staging, production
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

settings = Settings()
