from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Which store client backs the list: "postgrest" (Supabase) or "sql"
    store_backend: str = "postgrest"

    # Supabase / PostgREST
    supabase_url: str = ""  # e.g., https://<project>.supabase.co
    supabase_anon_key: str = ""

    # Applies to every remote call; a slow store fails the load instead of hanging it
    store_timeout_seconds: float = 30.0

    # SQL backend (local development)
    database_url: str = "sqlite:///weekly_shop.db"

    log_level: str = "INFO"

    @property
    def rest_url(self) -> str:
        """Base URL of the PostgREST API."""
        return f"{self.supabase_url.rstrip('/')}/rest/v1"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
