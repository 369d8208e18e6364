"""Application configuration managed via environment variables."""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "FitPlan Backend"
    debug: bool = False
    log_level: str = "INFO"
    database_url: str = "sqlite:///./data/tasks.db"
    legacy_tasks_path: str = "src/data/tasks.json"
    validate_task_parents: bool = False
    openai_api_key: str | None = None
    openai_model: str = "gpt-3.5-turbo"
    openai_timeout_seconds: float = 30.0
    opik_enabled: bool = False
    opik_api_key: str | None = None
    opik_project: str = "fitplan"


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()


settings = get_settings()
