from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.normalizers import to_uppercase, to_lowercase


class Settings(BaseSettings):
    """
    Application settings loaded from environment (and an optional .env file).
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # HTTP surface
    APP_NAME: str = "pokemon-review-api"
    API_PREFIX: str = "/api"

    # Database configuration
    POSTGRES_DRIVER: str = "asyncpg"
    POSTGRES_USERNAME: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "pokemon_review"

    # Full URL override (e.g. "sqlite+aiosqlite:///./pokemon.db"); wins over the POSTGRES_* fields
    DB_URL: str | None = None

    # SQLAlchemy
    SQLALCHEMY_ECHO: bool = False
    DB_CREATE_ALL: bool = False

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/pokemon-review")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    # --- Derived settings ---
    @property
    def DATABASE_URL(self) -> str:
        """
        Return the database URL the engine should connect to.

        `DB_URL` is used verbatim when set; otherwise the URL is assembled from
        the POSTGRES_* fields.
        """
        if self.DB_URL:
            return self.DB_URL

        return (
            f"postgresql+{self.POSTGRES_DRIVER}://"
            f"{self.POSTGRES_USERNAME}:{self.POSTGRES_PASSWORD}@"
            f"{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/"
            f"{self.POSTGRES_DB}"
        )

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize LOG_LEVEL to uppercase before Literal validation runs,
        so `LOG_LEVEL=debug` is accepted.
        """
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", mode="before")
    def normalize_log_format(cls, v: str | None) -> str | None:
        return to_lowercase(v)

    model_config = SettingsConfigDict(
        # .env is looked up next to the package root (src/pokemon_review/.env)
        env_file=str(Path(__file__).parent.parent / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Settings come only from the environment, so one cached instance is enough.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
