"""Application configuration loaded from environment variables."""

from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache


class Settings(BaseSettings):
    """Centralised settings — no hardcoded values anywhere else."""

    # Database
    database_url: str = Field(..., env="DATABASE_URL")

    # Google AI
    google_api_key: str = Field(..., env="GOOGLE_API_KEY")
    gemini_model: str = Field("gemini-2.5-flash", env="GEMINI_MODEL")
    gemini_fallback_model: str = Field("gemini-2.5-flash-lite", env="GEMINI_FALLBACK_MODEL")

    # Security
    service_token: str = Field(..., env="SERVICE_TOKEN")
    admin_password: str = Field(..., env="ADMIN_PASSWORD")
    admin_token: str = Field(..., env="ADMIN_TOKEN")
    allowed_origins: str = Field("http://localhost:3000", env="ALLOWED_ORIGINS")

    # App
    app_env: str = Field("development", env="APP_ENV")
    log_level: str = Field("INFO", env="LOG_LEVEL")

    # Packaging
    archive_name: str = Field("atomicend_project.zip", env="ARCHIVE_NAME")

    # Chat sessions live in memory; both bounds apply.
    session_ttl_seconds: int = Field(24 * 60 * 60, env="SESSION_TTL_SECONDS")
    session_max_entries: int = Field(10_000, env="SESSION_MAX_ENTRIES")

    # Derived
    @property
    def allowed_origins_list(self) -> list[str]:
        """Return ALLOWED_ORIGINS as a list."""
        return [o.strip() for o in self.allowed_origins.split(",")]

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached Settings instance."""
    return Settings()


settings = get_settings()
