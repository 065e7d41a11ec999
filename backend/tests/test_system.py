from fastapi.testclient import TestClient


def test_health_probes_injected_database(app):
    client = TestClient(app)
    r = client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert body["db"]["status"] == "ok"
    assert body["db"]["driver"] == "sqlite"
    assert body["time"]["tz"] == "Asia/Manila"


def test_version(app):
    r = TestClient(app).get("/version")
    assert r.status_code == 200
    assert r.json()["app"] == "SacramentDesk Backend"


def test_lifespan_keeps_injected_database_open(app, database):
    # The app does not own a database it was handed
    with TestClient(app) as client:
        assert client.get("/health").status_code == 200
    with database.session() as db:
        assert db.connection() is not None
