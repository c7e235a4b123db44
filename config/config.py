# config/config.py
import os
import tempfile
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

def _normalize_model(name: str) -> str:
    name = (name or "").strip()
    return name if name.startswith("models/") else f"models/{name}"

BASE_DIR_PATH = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- LLM ---
    # Only needed for generation; the cache runs without it.
    GOOGLE_API_KEY: Optional[str] = None
    LLM_PROVIDER: str = "gemini"
    GEMINI_CHAT_MODEL: str = Field(default="models/gemini-2.5-flash")
    LLM_TEMPERATURE: float = 0.7

    BASE_DIR: str = Field(default=BASE_DIR_PATH)

    # --- CACHE ---
    CACHE_ENABLED: bool = True
    CACHE_BACKEND: str = "file"  # "file" | "memory"
    CACHE_DIR: str = Field(default_factory=lambda: os.path.join(tempfile.gettempdir(), "chronolens-cache"))
    # Boundaries are local midnights; TTLs are elapsed seconds, so a DST day
    # yields 23h or 25h. "UTC" keeps every TTL within 24h (7d for the week view).
    CACHE_TIMEZONE: str = "UTC"
    CACHE_MEMORY_MAXSIZE: int = 1000
    CACHE_CLEANUP_INTERVAL: int = 3600

    # --- LOGGING ---
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None
    ENVIRONMENT: str = "development"

    def __init__(self, **data):
        super().__init__(**data)
        object.__setattr__(self, "GEMINI_CHAT_MODEL", _normalize_model(self.GEMINI_CHAT_MODEL))

settings = Settings()
