"""
Configuration management for the trip planner.
Supports three AI providers: OpenAI, Anthropic and a local mock.
"""
from dataclasses import dataclass
from typing import Literal, Optional

from pydantic_settings import BaseSettings


# Models that reject a temperature parameter (matched as lowercase substrings)
MODELS_WITHOUT_TEMPERATURE = (
    "gpt-5-mini",
    "gpt-5-nano",
    "o1-mini",
    "o1-preview",
    "o3-mini",
    "o4-mini",
)

DEFAULT_ANTHROPIC_MODEL = "claude-3-sonnet-20240229"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # AI Configuration
    ai_provider: Literal["openai", "anthropic", "mock"] = "mock"
    openai_api_key: str = ""
    anthropic_api_key: str = ""
    ai_base_url: str = ""
    ai_model: str = "gpt-4"

    # AI Parameters
    ai_max_tokens: int = 8000
    ai_temperature: float = 0.7
    ai_enable_chunking: bool = True
    ai_chunk_token_limit: int = 4000
    ai_max_chunks: int = 4
    ai_mock_max_delay: float = 2.0

    # Hosted database / auth
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""

    # Images
    pixabay_api_key: str = ""
    image_cache_ttl_seconds: int = 3600
    image_cache_max_entries: int = 500

    # Shared plans
    shared_plan_ttl_days: int = 30
    shared_plan_cleanup_interval_seconds: int = 3600
    public_base_url: str = "http://localhost:3000"
    security_allowed_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    # Server Configuration
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = True

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.security_allowed_origins.split(",") if o.strip()]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


# Global settings instance
settings = Settings()


@dataclass
class AIConfig:
    """Resolved provider configuration for a single request."""
    provider: str
    api_key: str
    base_url: Optional[str]
    model: str
    max_tokens: int
    temperature: float
    enable_chunking: bool
    chunk_token_limit: int
    max_chunks: int


def get_ai_config() -> AIConfig:
    """Get AI configuration for the configured provider."""
    if settings.ai_provider == "anthropic":
        api_key = settings.anthropic_api_key or settings.openai_api_key
    else:
        api_key = settings.openai_api_key or settings.anthropic_api_key

    return AIConfig(
        provider=settings.ai_provider,
        api_key=api_key,
        base_url=settings.ai_base_url or None,
        model=settings.ai_model or "gpt-4",
        max_tokens=settings.ai_max_tokens,
        temperature=settings.ai_temperature,
        enable_chunking=settings.ai_enable_chunking,
        chunk_token_limit=settings.ai_chunk_token_limit or 4000,
        max_chunks=max(1, settings.ai_max_chunks),
    )


def model_supports_temperature(model: Optional[str]) -> bool:
    """Check whether a model accepts the temperature parameter."""
    if not model:
        return True
    name = model.lower()
    return not any(blocked in name for blocked in MODELS_WITHOUT_TEMPERATURE)
