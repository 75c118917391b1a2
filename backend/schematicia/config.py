from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Schematicia"
    debug: bool = True
    env: str = "development"

    # Server
    cors_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:5173",
            "http://localhost:5174",
            "http://localhost:3000",
        ]
    )

    # LLM (OpenAI-compatible)
    llm_api_key: str = ""
    llm_base_url: str = ""  # Empty = OpenAI default. Set for local/proxy.
    llm_model: str = "gpt-4o-mini"
    llm_temperature: float = 0.2
    llm_max_retries: int = Field(default=2, ge=0)  # extra attempts after the first
    llm_timeout: float = 60.0


@lru_cache()
def get_settings() -> Settings:
    return Settings()
