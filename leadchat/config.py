import logging
import os
import sys
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_OPENAI_BASE_URL = "https://api.openai.com/v1"


def parse_allowed_origins(raw: Optional[str]) -> List[str]:
    """Split ALLOWED_ORIGINS into a CORS allow-list; unset means every origin"""
    if not raw:
        return ["*"]
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or ["*"]


class Settings(BaseModel):
    port: int = Field(default_factory=lambda: int(os.getenv("PORT", "5000")))
    openai_api_key: Optional[str] = Field(default_factory=lambda: os.getenv("OPENAI_API_KEY"))
    openai_base_url: str = Field(default_factory=lambda: os.getenv("OPENAI_BASE_URL", DEFAULT_OPENAI_BASE_URL))
    allowed_origins: List[str] = Field(default_factory=lambda: parse_allowed_origins(os.getenv("ALLOWED_ORIGINS")))
    debug: bool = Field(default_factory=lambda: os.getenv("DEBUG_LOGGING", "false").lower() == "true")

    # Fixed window limit applied to every /api/ route
    rate_limit_max_requests: int = 100
    rate_limit_window_seconds: int = 15 * 60


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def ensure_api_key(settings: Settings) -> None:
    """Exit the process when the completion API key is missing"""
    if not settings.openai_api_key:
        logger.error("OPENAI_API_KEY is not set. Please set this environment variable.")
        sys.exit(1)
