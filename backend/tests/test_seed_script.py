from __future__ import annotations

import importlib.util
from pathlib import Path

from fastapi.testclient import TestClient

from sacramentdesk.config import Settings
from sacramentdesk.db import Database
from sacramentdesk.main import create_app

SEED_SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "seed_sacrament_data.py"


def _load_seed_module():
    module_spec = importlib.util.spec_from_file_location("seed_sacrament_data", SEED_SCRIPT)
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)
    return module


def test_default_seed_leaves_an_unpaid_upcoming_booking(tmp_path, monkeypatch):
    monkeypatch.setenv("TZ", "Asia/Manila")
    url = f"sqlite:///{tmp_path / 'seed.db'}"
    seed = _load_seed_module()
    assert seed.main(["--db-url", url, "--create-tables"]) == 0

    database = Database(url)
    try:
        app = create_app(Settings(database_url=url, log_level="WARNING"), database=database)
        client = TestClient(app)
        r = client.post("/auth/login", json={"email": "cashier@church.com", "password": "password123"})
        assert r.status_code == 200, r.text

        r = client.get("/appointments")
        statuses = {a["participant_name"]: a["status"] for a in r.json()}
        # neither sample booking is swept to COMPLETED
        assert statuses == {"Baby John Doe": "CONFIRMED", "Mark & Lisa Garcia": "PENDING"}

        r = client.get("/appointments", params={"unpaid": "true", "activeOnly": "true"})
        assert [a["participant_name"] for a in r.json()] == ["Mark & Lisa Garcia"]
    finally:
        database.dispose()
