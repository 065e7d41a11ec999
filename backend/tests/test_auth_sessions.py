from __future__ import annotations

from datetime import timedelta

from fastapi.testclient import TestClient
from sqlalchemy import select, update

from sacramentdesk.models.user import UserRole, UserSession, UserStatus
from sacramentdesk.timeutils import utcnow


def test_login_sets_httponly_session_cookie(app, admin):
    client = TestClient(app)
    r = client.post("/auth/login", json={"email": "admin@church.com", "password": "password123"})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["message"] == "Login successful"
    assert body["user"]["email"] == "admin@church.com"
    assert "password" not in body["user"] and "password_hash" not in body["user"]

    set_cookie = r.headers["set-cookie"].lower()
    assert "session_token=" in set_cookie
    assert "httponly" in set_cookie
    assert "max-age=604800" in set_cookie

    r = client.get("/auth/session")
    assert r.status_code == 200
    assert r.json()["user"]["role"] == "ADMIN"


def test_login_email_is_case_insensitive(app, admin):
    client = TestClient(app)
    r = client.post("/auth/login", json={"email": "Admin@Church.com", "password": "password123"})
    assert r.status_code == 200


def test_login_rejects_bad_credentials(app, admin):
    client = TestClient(app)
    r = client.post("/auth/login", json={"email": "admin@church.com", "password": "nope"})
    assert r.status_code == 401
    r = client.post("/auth/login", json={"email": "ghost@church.com", "password": "password123"})
    assert r.status_code == 401


def test_login_requires_email_and_password(app):
    client = TestClient(app)
    r = client.post("/auth/login", json={"email": "admin@church.com"})
    assert r.status_code == 400
    r = client.post("/auth/login", json={"email": "", "password": ""})
    assert r.status_code == 400


def test_inactive_account_cannot_log_in(app, make_user):
    make_user("old@church.com", UserRole.CASHIER, status=UserStatus.INACTIVE)
    client = TestClient(app)
    r = client.post("/auth/login", json={"email": "old@church.com", "password": "password123"})
    assert r.status_code == 403
    assert "deactivated" in r.json()["detail"]


def test_requests_without_session_are_unauthorized(app):
    client = TestClient(app)
    for method, path in [
        ("get", "/auth/session"),
        ("get", "/appointments"),
        ("get", "/users"),
        ("get", "/payments/today"),
        ("get", "/reports/collections?from=2026-01-01&to=2026-01-31"),
        ("post", "/auth/logout"),
    ]:
        r = getattr(client, method)(path)
        assert r.status_code == 401, (method, path, r.status_code)


def test_garbage_token_is_unauthorized(app):
    client = TestClient(app, cookies={"session_token": "not-a-real-token"})
    assert client.get("/auth/session").status_code == 401


def test_logout_deletes_session(admin_client, database):
    r = admin_client.post("/auth/logout")
    assert r.status_code == 200
    assert r.json()["message"] == "Logged out successfully"

    with database.session() as db:
        assert db.execute(select(UserSession)).first() is None

    assert admin_client.get("/auth/session").status_code == 401


def test_expired_session_is_rejected_and_removed(admin_client, database):
    with database.session() as db:
        db.execute(update(UserSession).values(expires_at=utcnow() - timedelta(minutes=1)))
        db.commit()

    assert admin_client.get("/auth/session").status_code == 401

    with database.session() as db:
        assert db.execute(select(UserSession)).first() is None


def test_login_purges_users_expired_sessions(app, admin, login, database):
    login(admin.email)
    with database.session() as db:
        db.execute(update(UserSession).values(expires_at=utcnow() - timedelta(days=1)))
        db.commit()

    login(admin.email)

    with database.session() as db:
        sessions = db.execute(select(UserSession)).scalars().all()
        assert len(sessions) == 1


def test_session_of_inactive_user_is_rejected(priest_client, database, priest):
    # Flip the status behind the API's back: the lazy check must still catch it
    from sacramentdesk.models.user import User

    with database.session() as db:
        db.execute(update(User).where(User.id == priest.id).values(status=UserStatus.INACTIVE))
        db.commit()

    assert priest_client.get("/appointments").status_code == 401
    assert priest_client.get("/auth/session").status_code == 401

    with database.session() as db:
        assert db.execute(select(UserSession).where(UserSession.user_id == priest.id)).first() is None


def test_deactivating_user_invalidates_existing_session(admin_client, cashier_client, cashier):
    assert cashier_client.get("/auth/session").status_code == 200

    r = admin_client.put(f"/users/{cashier.id}", json={"status": "INACTIVE"})
    assert r.status_code == 200, r.text
    assert r.json()["status"] == "INACTIVE"

    assert cashier_client.get("/auth/session").status_code == 401
    assert cashier_client.get("/payments/today").status_code == 401
