from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ── App ─────────────────────────────────────
    APP_NAME: str = "Website Health Checker"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    # uvicorn reload only, not passed to FastAPI
    DEBUG: bool = True
    API_V1_PREFIX: str = "/api/v1"

    # ── PageSpeed Insights ──────────────────────
    PAGESPEED_API_KEY: Optional[str] = None
    PAGESPEED_API_URL: str = "https://www.googleapis.com/pagespeedonline/v5/runPagespeed"

    # ── Technology detection (Wappalyzer) ───────
    TECH_DETECTION_ENABLED: bool = True
    WAPPALYZER_API_KEY: Optional[str] = None
    WAPPALYZER_API_URL: str = "https://api.wappalyzer.com/v2/lookup/"

    # A Lighthouse run regularly takes 20-40s per strategy
    HTTP_TIMEOUT_SECONDS: float = 60.0

    # ── Contact form relay (Formspree compatible) ──
    FORMS_ENDPOINT_URL: Optional[str] = None
    FORMS_TIMEOUT_SECONDS: float = 10.0

    # ── Pricing ─────────────────────────────────
    GREEN_BUNDLE_PRICE: float = 99.0
    CURRENCY_SYMBOL: str = "£"

    # ── Logging ─────────────────────────────────
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parent.parent.parent / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
