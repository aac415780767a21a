from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    openai_api_key: str
    allowed_origins: str = "http://localhost:3000"

    # Optional: set to use OpenRouter or any OpenAI-compatible provider
    # e.g. https://openrouter.ai/api/v1
    openai_base_url: Optional[str] = "https://openrouter.ai/api/v1"

    # Model name — use OpenRouter format if needed e.g. "openai/gpt-4o-mini"
    chat_model: str = "meta-llama/llama-3.1-8b-instruct"
    generation_temperature: float = 0.3
    generation_max_tokens: int = 4000
    generation_timeout: float = 60.0
    generation_max_retries: int = 2

    # 20k tokens per chunk at ~4 chars/token
    max_chunk_chars: int = 80_000
    default_item_count: int = 5
    # 1 = chunks are generated one after another
    generation_concurrency: int = 1

    max_source_chars: int = 1_000_000
    max_upload_bytes: int = 15 * 1024 * 1024

    # Persistence is disabled unless both are set
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None

    log_level: str = "INFO"

    @property
    def origins_list(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",")]

    @property
    def persistence_enabled(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    class Config:
        env_file = ".env"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
