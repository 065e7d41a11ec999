# backend/sacramentdesk/db.py
"""
Database handle and request-scoped session dependency.

The engine is owned by a `Database` object that the application factory
creates at startup and disposes at shutdown; routers never import an engine.
"""
from __future__ import annotations

from typing import Any, Dict, Generator, Optional

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

Base = declarative_base()


class Database:
    def __init__(self, url: str, echo: bool = False, engine: Optional[Engine] = None) -> None:
        self.url = url
        if engine is None:
            kwargs: Dict[str, Any] = {"echo": echo, "pool_pre_ping": True}
            if url.startswith("sqlite"):
                kwargs["connect_args"] = {"check_same_thread": False}
            engine = create_engine(url, **kwargs)
        self.engine = engine
        self.SessionLocal = sessionmaker(
            bind=self.engine, autocommit=False, autoflush=False, expire_on_commit=False
        )

    def create_all(self) -> None:
        # Make sure every mapped class is registered before emitting DDL
        import sacramentdesk.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def drop_all(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        self.engine.dispose()


# Dependency to inject DB session
def get_db(request: Request) -> Generator[Session, None, None]:
    db = request.app.state.db.session()
    try:
        yield db
    finally:
        db.close()
