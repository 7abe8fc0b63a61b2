"""Application configuration loaded from environment variables."""

from functools import lru_cache
from pathlib import Path

from pydantic import ConfigDict, computed_field, field_validator
from pydantic_settings import BaseSettings

PACKAGE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_CONTENT_DIR = PACKAGE_DIR / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Environment
    ENV: str = "dev"
    DEBUG: bool = False

    # Database
    # Any SQLAlchemy URL; PostgreSQL needs the "postgres" extra installed
    DATABASE_URL: str = "sqlite:///./mcqbank.db"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "human"  # "human" for dev, "json" for prod

    # Content
    CONTENT_DIR: str | None = None

    # Seeding
    SEED_BATCH_SIZE: int = 5
    SEED_DEFAULT_DIFFICULTY: int = 2
    SAMPLE_MARKERS: list[str] = ["sample"]

    model_config = ConfigDict(
        env_file=[".env"],
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("SEED_BATCH_SIZE")
    @classmethod
    def _positive_batch_size(cls, value: int) -> int:
        if value < 1:
            raise ValueError("SEED_BATCH_SIZE must be at least 1")
        return value

    @field_validator("SEED_DEFAULT_DIFFICULTY")
    @classmethod
    def _difficulty_range(cls, value: int) -> int:
        if not 1 <= value <= 3:
            raise ValueError("SEED_DEFAULT_DIFFICULTY must be between 1 and 3")
        return value

    @computed_field  # type: ignore[misc]
    @property
    def content_dir(self) -> Path:
        """Directory holding catalog.json and the per-topic question files."""
        if self.CONTENT_DIR:
            return Path(self.CONTENT_DIR).expanduser()
        return DEFAULT_CONTENT_DIR

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
