from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# .env at the repository root wins over nothing, loses to the real environment
ENV_PATH = Path(__file__).resolve().parent.parent.parent / ".env"
if ENV_PATH.exists():
    load_dotenv(ENV_PATH)


class Settings(BaseSettings):
    # --- App ---
    APP_NAME: str = "Cartonizer"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # --- Auth ---
    JWT_SECRET: str = "change-me"
    JWT_ALG: str = "HS256"
    JWT_EXPIRE_DAYS: int = 14
    COOKIE_NAME: str = "cartonizer_token"

    # --- Database ---
    DATABASE_URL: str = "sqlite+aiosqlite:///./cartonizer.db"

    # --- Operator bootstrap ---
    DEFAULT_OPERATOR_USERNAME: str = "operator"
    DEFAULT_OPERATOR_PASSWORD: str = "change-me-now"

    # --- Product catalog ---
    PRODUCT_CATALOG_BASE_URL: str = ""
    PRODUCT_CATALOG_TIMEOUT_SECONDS: float = 5.0
    ENRICHMENT_USE_DEFAULTS: bool = True

    # --- Packing policy (not carried by the request) ---
    SEPARATE_FRAGILE_ITEMS: bool = True
    MAX_UTILIZATION_THRESHOLD: Decimal = Decimal("0.95")

    # --- Carton catalog bootstrap ---
    SEED_DEFAULT_CARTONS: bool = True

    model_config = SettingsConfigDict(
        env_file=ENV_PATH,
        env_file_encoding="utf-8",
        extra="ignore"
    )


settings = Settings()
