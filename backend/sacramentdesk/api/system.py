# backend/sacramentdesk/api/system.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

router = APIRouter(tags=["ops"])
logger = logging.getLogger(__name__)


def _db_driver_from_url(url: Optional[str]) -> Optional[str]:
    if not url or "://" not in url:
        return None
    scheme = url.split("://", 1)[0]  # e.g., "postgresql+psycopg2"
    if "+" in scheme:
        return scheme.split("+", 1)[1]  # "psycopg2"
    return scheme  # fallback


@router.get("/health")
def health(request: Request):
    """Liveness check with a lightweight DB probe and local time."""
    settings = request.app.state.settings
    database = request.app.state.db
    now_local = datetime.now(ZoneInfo(settings.timezone)).isoformat()

    db = {"status": "ok", "driver": _db_driver_from_url(database.url)}
    try:
        with database.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("health probe failed: %s", type(e).__name__)
        db["status"] = f"error: {type(e).__name__}"

    return {
        "status": "ok",
        "time": {"tz": settings.timezone, "now": now_local},
        "db": db,
    }


@router.get("/version")
def version(request: Request):
    """Minimal runtime info; confirms DB driver for the UI."""
    settings = request.app.state.settings
    return {
        "app": "SacramentDesk Backend",
        "db_driver": _db_driver_from_url(request.app.state.db.url),
        "tz": settings.timezone,
    }
