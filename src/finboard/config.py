"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()

GATEWAY_BACKENDS = ("sqlmodel", "rest")
SERIES_ORDERS = ("first_seen", "chronological")
LOCALES = ("en", "pt_BR")


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "FinBoard"
    DB_FILENAME = "finboard.db"
    DEFAULT_CURRENCY = "BRL"
    RECENT_SERIES_LENGTH = 7
    LATEST_ROWS = 5

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("FINBOARD_SECRET_KEY", "replace-me")
        self.DEV_MODE = _env_bool("FINBOARD_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()
        self.DATABASE_URL = os.getenv("FINBOARD_DATABASE_URL", self._build_sqlite_url())

        self.GATEWAY = os.getenv("FINBOARD_GATEWAY", "sqlmodel").strip().lower()
        self.GATEWAY_URL = (os.getenv("FINBOARD_GATEWAY_URL") or "").rstrip("/")
        self.GATEWAY_KEY = os.getenv("FINBOARD_GATEWAY_KEY") or ""
        self.GATEWAY_TIMEOUT = _env_float("FINBOARD_GATEWAY_TIMEOUT", 10.0)
        self.AUTH_TOKEN_TTL_HOURS = _env_float("FINBOARD_AUTH_TOKEN_TTL_HOURS", 24 * 7)

        self.LOCALE = os.getenv("FINBOARD_LOCALE", "en")
        self.MONTHLY_SERIES_ORDER = os.getenv("FINBOARD_MONTHLY_SERIES_ORDER", "chronological")
        self.ENFORCE_CATEGORY_KIND = _env_bool("FINBOARD_ENFORCE_CATEGORY_KIND", default=True)
        self.SEED_DEFAULT_CATEGORIES = _env_bool(
            "FINBOARD_SEED_DEFAULT_CATEGORIES", default=True
        )

        self._validate()

    def _validate(self) -> None:
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("FINBOARD_SECRET_KEY must be set in non-dev mode.")
        if self.GATEWAY not in GATEWAY_BACKENDS:
            raise ValueError(
                f"FINBOARD_GATEWAY must be one of {', '.join(GATEWAY_BACKENDS)}; got {self.GATEWAY!r}"
            )
        if self.GATEWAY == "rest" and not (self.GATEWAY_URL and self.GATEWAY_KEY):
            raise ValueError(
                "FINBOARD_GATEWAY=rest requires FINBOARD_GATEWAY_URL and FINBOARD_GATEWAY_KEY."
            )
        if self.MONTHLY_SERIES_ORDER not in SERIES_ORDERS:
            raise ValueError(
                "FINBOARD_MONTHLY_SERIES_ORDER must be 'first_seen' or 'chronological'."
            )
        if self.LOCALE not in LOCALES:
            raise ValueError(f"FINBOARD_LOCALE must be one of {', '.join(LOCALES)}.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory holding the embedded database and logs."""

        data_root = os.getenv("FINBOARD_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {}


class DevConfig(BaseConfig):
    """Development configuration using the embedded SQLModel gateway."""

    DEBUG = True
    TESTING = False


class TestConfig(BaseConfig):
    """Configuration used by the test-suite."""

    DEBUG = False
    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.SEED_DEFAULT_CATEGORIES = False
