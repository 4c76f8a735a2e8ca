from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str = Field(default="sqlite+aiosqlite:///./livros.db")
    sql_echo: bool = Field(default=False)

    log_level: str = Field(default="INFO")

    # Origins allowed by the CORS middleware; "*" opens the API to any client
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()
