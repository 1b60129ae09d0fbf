"""Runtime settings loaded from environment variables."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/129.0.0.0 Safari/537.36"
)
DEFAULT_FETCH_TIMEOUT = 20.0
DEFAULT_GROQ_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_SUMMARY_MODEL = "llama-3.3-70b-versatile"
DEFAULT_TRANSLATION_MODEL = "llama-3.3-70b-versatile"


@dataclass
class Settings:
    """Settings for the fetch and text-generation collaborators."""

    user_agent: str = DEFAULT_USER_AGENT
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT
    groq_api_key: Optional[str] = None
    groq_base_url: str = DEFAULT_GROQ_BASE_URL
    summary_model: str = DEFAULT_SUMMARY_MODEL
    translation_model: str = DEFAULT_TRANSLATION_MODEL
    log_level: str = "INFO"


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r, using %s", name, raw, default)
        return default


def load_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings(
        user_agent=os.getenv("NEWSNORM_USER_AGENT") or DEFAULT_USER_AGENT,
        fetch_timeout=_float_env("NEWSNORM_FETCH_TIMEOUT", DEFAULT_FETCH_TIMEOUT),
        groq_api_key=os.getenv("GROQ_API_KEY") or None,
        groq_base_url=os.getenv("GROQ_BASE_URL") or DEFAULT_GROQ_BASE_URL,
        summary_model=os.getenv("GROQ_SUMMARY_MODEL") or DEFAULT_SUMMARY_MODEL,
        translation_model=(
            os.getenv("GROQ_TRANSLATION_MODEL") or DEFAULT_TRANSLATION_MODEL
        ),
        log_level=os.getenv("LOG_LEVEL") or "INFO",
    )
