from __future__ import annotations

from datetime import timedelta
from typing import Callable

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from sacramentdesk.config import Settings
from sacramentdesk.db import Database
from sacramentdesk.main import create_app
from sacramentdesk.models.user import User, UserRole, UserStatus
from sacramentdesk.services.auth import hash_password
from sacramentdesk.timeutils import today_local

PASSWORD = "password123"
TZ = "Asia/Manila"


@pytest.fixture
def database():
    # One in-memory SQLite DB shared by every connection of this test
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    db = Database("sqlite://", engine=engine)
    db.create_all()
    yield db
    db.drop_all()
    db.dispose()


@pytest.fixture
def app(database):
    settings = Settings(database_url="sqlite://", timezone=TZ, log_level="WARNING")
    return create_app(settings, database=database)


@pytest.fixture
def make_user(database) -> Callable[..., User]:
    def _make(
        email: str,
        role: UserRole,
        name: str | None = None,
        status: UserStatus = UserStatus.ACTIVE,
    ) -> User:
        with database.session() as db:
            user = User(
                email=email,
                name=name or email.split("@")[0].title(),
                role=role,
                status=status,
                password_hash=hash_password(PASSWORD),
            )
            db.add(user)
            db.commit()
            db.refresh(user)
            return user

    return _make


@pytest.fixture
def login(app) -> Callable[[str], TestClient]:
    """Return a TestClient carrying a session cookie for `email`."""

    def _login(email: str, password: str = PASSWORD) -> TestClient:
        client = TestClient(app)
        r = client.post("/auth/login", json={"email": email, "password": password})
        assert r.status_code == 200, r.text
        return client

    return _login


@pytest.fixture
def admin(make_user):
    return make_user("admin@church.com", UserRole.ADMIN, name="Admin User")


@pytest.fixture
def priest(make_user):
    return make_user("priest@church.com", UserRole.PRIEST, name="Fr. John Smith")


@pytest.fixture
def cashier(make_user):
    return make_user("cashier@church.com", UserRole.CASHIER, name="Maria Santos")


@pytest.fixture
def admin_client(admin, login):
    return login(admin.email)


@pytest.fixture
def priest_client(priest, login):
    return login(priest.email)


@pytest.fixture
def cashier_client(cashier, login):
    return login(cashier.email)


@pytest.fixture
def today():
    return today_local(TZ)


@pytest.fixture
def book(admin_client, today):
    """Create an appointment through the API (as admin) and return its JSON."""

    def _book(days_ahead: int = 7, **overrides):
        payload = {
            "sacrament_type": "BAPTISM",
            "participant_name": "Baby John Doe",
            "participant_phone": "09123456789",
            "scheduled_date": str(today + timedelta(days=days_ahead)),
            "scheduled_time": "10:00 AM",
            "fee": 500,
        }
        payload.update(overrides)
        r = admin_client.post("/appointments", json=payload)
        assert r.status_code == 201, r.text
        return r.json()

    return _book
