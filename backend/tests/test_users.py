from __future__ import annotations

from fastapi.testclient import TestClient


def _new_user(**overrides):
    payload = {
        "name": "Fr. Pedro Reyes",
        "email": "pedro@church.com",
        "password": "s3cret-pass",
        "role": "PRIEST",
    }
    payload.update(overrides)
    return payload


def test_admin_creates_user_with_defaults(admin_client, app):
    r = admin_client.post("/users", json=_new_user())
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["role"] == "PRIEST"
    assert body["status"] == "ACTIVE"
    assert body["availability"] == "AVAILABLE"
    assert "password" not in body and "password_hash" not in body

    # the new account can log in with the password it was given
    client = TestClient(app)
    r = client.post("/auth/login", json={"email": "pedro@church.com", "password": "s3cret-pass"})
    assert r.status_code == 200


def test_duplicate_email_is_rejected(admin_client, cashier):
    r = admin_client.post("/users", json=_new_user(email="cashier@church.com"))
    assert r.status_code == 400
    assert r.json()["detail"] == "Email already exists"


def test_create_user_rejects_unknown_role(admin_client):
    r = admin_client.post("/users", json=_new_user(role="BISHOP"))
    assert r.status_code == 400


def test_non_admins_cannot_manage_users(priest_client, cashier_client, admin):
    for client in (priest_client, cashier_client):
        assert client.post("/users", json=_new_user()).status_code == 403
        assert client.get("/users").status_code == 403
        assert client.put(f"/users/{admin.id}", json={"name": "Hijack"}).status_code == 403


def test_list_users_sorted_and_filtered(admin_client, priest, cashier, make_user):
    from sacramentdesk.models.user import UserRole

    make_user("abel@church.com", UserRole.PRIEST, name="Fr. Abel Cruz")

    r = admin_client.get("/users")
    assert r.status_code == 200
    names = [u["name"] for u in r.json()]
    assert names == sorted(names)
    assert len(names) == 4

    r = admin_client.get("/users", params={"role": "PRIEST"})
    assert [u["name"] for u in r.json()] == ["Fr. Abel Cruz", "Fr. John Smith"]

    r = admin_client.get("/users", params={"status": "INACTIVE"})
    assert r.json() == []


def test_get_single_user(admin_client, priest_client, priest, cashier):
    r = admin_client.get(f"/users/{priest.id}")
    assert r.status_code == 200
    assert r.json()["email"] == "priest@church.com"

    # users may read their own record, nobody else's
    assert priest_client.get(f"/users/{priest.id}").status_code == 200
    assert priest_client.get(f"/users/{cashier.id}").status_code == 403

    assert admin_client.get("/users/9999").status_code == 404


def test_update_user_fields_and_password(admin_client, priest, app):
    r = admin_client.put(
        f"/users/{priest.id}",
        json={"availability": "DAYOFF", "name": "Fr. John S.", "password": "new-pass-1"},
    )
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["availability"] == "DAYOFF"
    assert body["name"] == "Fr. John S."

    client = TestClient(app)
    assert client.post(
        "/auth/login", json={"email": "priest@church.com", "password": "password123"}
    ).status_code == 401
    assert client.post(
        "/auth/login", json={"email": "priest@church.com", "password": "new-pass-1"}
    ).status_code == 200


def test_update_user_email_collision(admin_client, priest, cashier):
    r = admin_client.put(f"/users/{priest.id}", json={"email": "cashier@church.com"})
    assert r.status_code == 400


def test_update_missing_user(admin_client):
    assert admin_client.put("/users/9999", json={"name": "Nobody"}).status_code == 404


def test_reactivated_user_can_log_in_again(admin_client, cashier, app):
    admin_client.put(f"/users/{cashier.id}", json={"status": "INACTIVE"})
    client = TestClient(app)
    creds = {"email": "cashier@church.com", "password": "password123"}
    assert client.post("/auth/login", json=creds).status_code == 403

    admin_client.put(f"/users/{cashier.id}", json={"status": "ACTIVE"})
    assert client.post("/auth/login", json=creds).status_code == 200
