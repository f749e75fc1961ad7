from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from pathlib import Path

# Go up to the repository root (backend/valuator/config.py -> repo/)
project_root = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    # Text generation service (any OpenAI-compatible chat completion API)
    llm_api_key: Optional[str] = None
    llm_base_url: str = "https://api.groq.com/openai/v1"
    llm_model: str = "llama3-70b-8192"
    llm_max_tokens: int = 1024

    # Per-category timeout for insight generation; None leaves it to the caller
    insight_timeout_seconds: Optional[float] = None

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=str(project_root / '.env'),
        env_file_encoding='utf-8',
        extra='ignore',
    )


def get_settings() -> Settings:
    """Get fresh settings instance - no caching to avoid stale API keys."""
    return Settings()
