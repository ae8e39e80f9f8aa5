# src/rideem/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole process.
- No secrets required at import time (the app key is optional).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .core.models import DEFAULT_HOST

ENV_PREFIX = "RIDEEM"

DEFAULT_POOL_SIZE = 10
DEFAULT_TIMEOUT_SECONDS = 10.0


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except ImportError:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str) -> Optional[Path]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- Remote service ----
    host: str
    app_key: Optional[str]
    timeout_seconds: float

    # ---- Worker pool ----
    pool_size: int

    # ---- Logging ----
    log_level: str
    log_dir: Optional[Path]

    @staticmethod
    def from_env() -> "Settings":
        host = (_env(_k("HOST"), DEFAULT_HOST).strip() or DEFAULT_HOST).rstrip("/")

        # Accept both RIDEEM_KEY and RIDEEM_APP_KEY.
        app_key = _first_env(_k("KEY"), _k("APP_KEY"), default=None)
        if app_key is not None:
            app_key = app_key.strip()

        timeout_seconds = _env_float(_k("TIMEOUT_SECONDS"), DEFAULT_TIMEOUT_SECONDS)
        if timeout_seconds <= 0:
            timeout_seconds = DEFAULT_TIMEOUT_SECONDS

        pool_size = max(1, _env_int(_k("POOL_SIZE"), DEFAULT_POOL_SIZE))

        log_level = _env(_k("LOG_LEVEL"), "INFO").strip().upper() or "INFO"
        log_dir = _env_path(_k("LOG_DIR"))

        return Settings(
            host=host,
            app_key=app_key,
            timeout_seconds=timeout_seconds,
            pool_size=pool_size,
            log_level=log_level,
            log_dir=log_dir,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
