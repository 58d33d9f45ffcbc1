"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - Supabase persistence is enabled only when BOTH url and anon key are set

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box locally,
      with history persistence disabled until credentials are supplied
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from outlet_calc.core.domain_types import HistoryBackend, HISTORY_TABLE


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # History store
    history_backend: HistoryBackend = HistoryBackend.SUPABASE
    history_table: str = HISTORY_TABLE
    history_initial_load_limit: int = 100

    # Supabase (remote table)
    supabase_url: str | None = None
    supabase_anon_key: str | None = None

    @field_validator("supabase_url", "supabase_anon_key", mode="before")
    @classmethod
    def blank_is_missing(cls, v: object) -> object:
        """Empty env values count as absent."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    # Database (HISTORY_BACKEND=database)
    database_url: str = (
        "postgresql+asyncpg://outlet:outlet@db:5432/outlet"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 5
    database_max_overflow: int = 5

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def missing_supabase_settings(self) -> list[str]:
        missing = []
        if not self.supabase_url:
            missing.append("SUPABASE_URL")
        if not self.supabase_anon_key:
            missing.append("SUPABASE_ANON_KEY")
        return missing


@lru_cache
def get_settings() -> Settings:
    return Settings()
