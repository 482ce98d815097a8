import os
from pathlib import Path

# Basic settings helper to read environment configuration.

DEFAULT_DB_PATH = Path(__file__).resolve().parent / "app.db"


def _as_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.lower() in ("1", "true", "yes", "on")


class Settings:
    def __init__(self) -> None:
        self.ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
        self.DATABASE_URL: str = os.getenv("DATABASE_URL", f"sqlite:///{DEFAULT_DB_PATH}")
        self.DATABASE_ECHO: bool = _as_bool(os.getenv("DATABASE_ECHO"), False)
        # Prefix stripped from incoming paths when served behind a proxy (e.g. "/api")
        self.ROOT_ROUTE: str = os.getenv("ROOT_ROUTE", "").rstrip("/")
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
        self.PLACES_API_BASE_URL: str = os.getenv("PLACES_API_BASE_URL", "http://localhost:1337")
        self.PLACES_API_TIMEOUT: float = float(os.getenv("PLACES_API_TIMEOUT", "5"))

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


settings = Settings()
