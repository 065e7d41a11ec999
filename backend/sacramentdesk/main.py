# backend/sacramentdesk/main.py
"""
Application factory.

Run with:  uvicorn sacramentdesk.main:create_app --factory
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Ensure all SQLAlchemy models are imported so relationships resolve
import sacramentdesk.models  # noqa: F401

from sacramentdesk.api import (
    appointments,  # /appointments
    auth,          # /auth
    payments,      # /payments
    reports,       # /reports
    users,         # /users
)
# Ops/system endpoints (/health, /version)
from sacramentdesk.api.system import router as system_router
from sacramentdesk.config import Settings, get_settings
from sacramentdesk.db import Database

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed input is a plain 400 for the dashboards
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    settings = settings or get_settings()
    _configure_logging(settings.log_level)

    owns_db = database is None
    if database is None:
        database = Database(settings.database_url, echo=settings.sql_echo)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("starting with database driver %s", database.engine.dialect.name)
        yield
        if owns_db:
            database.dispose()
            logger.info("database engine disposed")

    app = FastAPI(title="SacramentDesk", lifespan=lifespan)
    app.state.settings = settings
    app.state.db = database

    # --- CORS for the dashboard frontend (cookies need credentials) ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(Exception, _unhandled_error)

    # Routers
    app.include_router(system_router)  # /health, /version
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(appointments.router)
    app.include_router(payments.router)
    app.include_router(reports.router)

    return app
