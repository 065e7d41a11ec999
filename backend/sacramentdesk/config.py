# backend/sacramentdesk/config.py
"""
Runtime configuration.

Values come from the process environment; a local `.env` file is loaded
first so developers can keep DATABASE_URL and friends out of their shell.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    database_url: str = "sqlite:///./sacramentdesk.db"
    sql_echo: bool = False
    timezone: str = "Asia/Manila"
    session_cookie_name: str = "session_token"
    session_ttl_days: int = 7
    cookie_secure: bool = False
    cors_origins: List[str] = field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"]
    )
    log_level: str = "INFO"


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings(
        database_url=os.getenv("DATABASE_URL", "sqlite:///./sacramentdesk.db"),
        sql_echo=_env_bool("SQL_ECHO"),
        timezone=os.getenv("TZ", "Asia/Manila"),
        session_cookie_name=os.getenv("SESSION_COOKIE_NAME", "session_token"),
        session_ttl_days=int(os.getenv("SESSION_TTL_DAYS", "7")),
        cookie_secure=_env_bool("COOKIE_SECURE"),
        cors_origins=_env_list(
            "CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
        ),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
