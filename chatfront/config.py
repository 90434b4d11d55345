from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv


DEFAULT_API_BASE_URL = "http://localhost:8000"

_ENV_LOADED = False


def init_env() -> None:
    global _ENV_LOADED
    if not _ENV_LOADED:
        # Load .env if present; real environment variables win
        load_dotenv(override=False)
        _ENV_LOADED = True


def api_base_url() -> str:
    """API base URL handed to the browser through /config.js."""
    return os.getenv("API_BASE_URL") or DEFAULT_API_BASE_URL


def port() -> int:
    return int(os.getenv("PORT") or 3000)


def host() -> str:
    return os.getenv("HOST", "0.0.0.0")


def static_dir() -> Path:
    return Path(os.getenv("STATIC_DIR", "./dist")).resolve()


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def app_env() -> str:
    return os.getenv("APP_ENV", "development")
