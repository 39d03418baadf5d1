"""Application configuration helpers."""

from dataclasses import dataclass
import logging
import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "llama-3.1-8b-instant"
DEFAULT_TIMEOUT_MS = 60_000
DEFAULT_REPAIR_MAX_CHARS = 24_000


@dataclass
class Settings:
    """Holds runtime configuration loaded from the environment."""

    groq_api_key: Optional[str] = None
    groq_base_url: str = DEFAULT_BASE_URL
    default_model: str = DEFAULT_MODEL
    request_timeout_ms: int = DEFAULT_TIMEOUT_MS
    strict_days: bool = False
    repair_max_chars: int = DEFAULT_REPAIR_MAX_CHARS

    @property
    def request_timeout(self) -> float:
        return self.request_timeout_ms / 1000.0


def _positive_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r", name, raw)
        return default
    return value if value > 0 else default


def _flag(name: str) -> bool:
    return (os.getenv(name) or "").strip().lower() in {"1", "true", "yes", "on"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load and cache settings so every module shares the same values."""

    api_key = os.getenv("GROQ_API_KEY")
    if not api_key:
        # Calls still go out; the provider answers 401 and that surfaces as an upstream error.
        logger.warning("GROQ_API_KEY is not set; completion calls will be rejected upstream.")

    return Settings(
        groq_api_key=api_key,
        groq_base_url=os.getenv("GROQ_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
        default_model=os.getenv("ITINERARY_DEFAULT_MODEL", DEFAULT_MODEL),
        request_timeout_ms=_positive_int("REQUEST_TIMEOUT_MS", DEFAULT_TIMEOUT_MS),
        strict_days=_flag("ITINERARY_STRICT_DAYS"),
        repair_max_chars=_positive_int("ITINERARY_REPAIR_MAX_CHARS", DEFAULT_REPAIR_MAX_CHARS),
    )
