"""Application settings loaded from the environment."""

import os
from functools import lru_cache
from typing import List, Optional
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()

DEFAULT_WHOP_API_BASE = "https://api.whop.com/api/v1"


class Settings(BaseModel):
    whop_app_id: Optional[str] = None
    whop_api_key: Optional[str] = None
    whop_api_base: str = DEFAULT_WHOP_API_BASE
    whop_api_timeout: float = 30.0
    allow_writes: bool = False
    groq_api_key: Optional[str] = None
    app_env: str = "production"
    log_level: str = "INFO"
    cors_origins: List[str] = ["http://localhost:3000"]

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"


def _split_origins(value: Optional[str]) -> List[str]:
    if not value:
        return ["http://localhost:3000"]
    return [origin.strip() for origin in value.split(",") if origin.strip()]


def load_settings() -> Settings:
    """Build settings from environment variables (and .env, if present)."""
    return Settings(
        whop_app_id=os.getenv("WHOP_APP_ID") or None,
        whop_api_key=os.getenv("WHOP_API_KEY") or None,
        whop_api_base=os.getenv("WHOP_API_BASE", DEFAULT_WHOP_API_BASE),
        whop_api_timeout=float(os.getenv("WHOP_API_TIMEOUT", "30")),
        # Only the exact string "true" enables writes
        allow_writes=os.getenv("ALLOW_WRITES") == "true",
        groq_api_key=os.getenv("GROQ_API_KEY") or None,
        app_env=os.getenv("APP_ENV", "production"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        cors_origins=_split_origins(os.getenv("CORS_ORIGINS")),
    )


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, read once on first use."""
    return load_settings()
