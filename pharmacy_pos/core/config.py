"""Application configuration.

Environment variables override all defaults. A `.env` file at the project
root is loaded for local development and never overrides the real environment.
"""

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

_PROJECT_DIR = Path(__file__).resolve().parents[2]
load_dotenv(dotenv_path=_PROJECT_DIR / ".env", override=False)


class Settings:
    # Persistence: one serialized state blob under a fixed key
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./kmc_pharmacy.db")
    STORAGE_KEY: str = os.getenv("STORAGE_KEY", "KHAN_MEDICAL_DATA")

    # Receipt header
    BUSINESS_NAME: str = os.getenv("BUSINESS_NAME", "Khan Medical Complex")
    BUSINESS_ADDRESS: str = os.getenv("BUSINESS_ADDRESS", "Peshawar Road, Main Market")
    BUSINESS_PHONE: str = os.getenv("BUSINESS_PHONE", "+92 123 4567890")
    CURRENCY_SYMBOL: str = os.getenv("CURRENCY_SYMBOL", "$")

    # Checkout
    WALK_IN_CUSTOMER_ID: str = "WALK-IN"
    DEFAULT_CUSTOMER_NAME: str = os.getenv("DEFAULT_CUSTOMER_NAME", "Walk-in Customer")
    SEARCH_RESULT_LIMIT: int = int(os.getenv("SEARCH_RESULT_LIMIT", "8"))

    # Stock alerts
    LOW_STOCK_THRESHOLD: int = int(os.getenv("LOW_STOCK_THRESHOLD", "10"))
    CRITICAL_STOCK_THRESHOLD: int = int(os.getenv("CRITICAL_STOCK_THRESHOLD", "5"))
    EXPIRY_WARNING_MONTHS: int = int(os.getenv("EXPIRY_WARNING_MONTHS", "3"))

    # CORS (specific origins only, no wildcards)
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    DEBUG: bool = ENVIRONMENT == "development"


settings = Settings()
