"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Values are validated at load time.
"""

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    Every setting has a default so the service starts against a local
    SQLite file without any environment.
    """

    # App
    app_name: str = "tasks-management"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database: any SQLAlchemy async URL (sqlite+aiosqlite, postgresql+asyncpg)
    database_url: str = "sqlite+aiosqlite:///./tasks_management.db"
    database_echo: bool = False
    # Create tables on startup (local/dev). Production schemas are managed by Alembic.
    database_create_all: bool = False
    db_pool_size: int | None = None
    db_max_overflow: int | None = None

    # Acting scope headers (host request layer supplies company, group and actor)
    company_header_name: str = "X-Company-ID"
    group_header_name: str = "X-Group-ID"
    user_header_name: str = "X-User-ID"
    request_id_header: str = "X-Request-ID"

    # CORS (comma-separated origins; empty disables the middleware)
    allowed_origins: str = ""

    # Asset projection
    asset_summary_max_length: int = 500

    # Bulk delete: False = best-effort (attempt every task), True = abort on first failure
    bulk_delete_strict: bool = False

    # Listing
    default_page_size: int = 20
    max_page_size: int = 500

    # OpenTelemetry (opt-in; needs the telemetry extra)
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"  # console, otlp, none
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_limits(self) -> "Settings":
        """Reject page and summary limits that cannot produce results."""
        if self.asset_summary_max_length < 4:
            raise ValueError(
                "ASSET_SUMMARY_MAX_LENGTH must be at least 4 (room for the '...' suffix)."
            )
        if self.default_page_size < 1 or self.max_page_size < self.default_page_size:
            raise ValueError(
                "DEFAULT_PAGE_SIZE must be >= 1 and MAX_PAGE_SIZE must be >= DEFAULT_PAGE_SIZE."
            )
        if not 0.0 <= self.telemetry_sample_rate <= 1.0:
            raise ValueError("TELEMETRY_SAMPLE_RATE must be between 0.0 and 1.0.")
        if not self.database_url:
            raise ValueError("DATABASE_URL must not be empty.")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached settings. Call get_settings.cache_clear() in tests after changing env."""
    return Settings()
