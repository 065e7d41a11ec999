from __future__ import annotations

from datetime import timedelta

from sqlalchemy import update

from sacramentdesk.models.payment import Payment
from sacramentdesk.models.user import UserRole
from sacramentdesk.timeutils import utcnow


def _pay(client, appt_id, amount, method="CASH"):
    r = client.post(
        "/payments",
        json={"appointment_id": appt_id, "amount": amount, "payment_method": method},
    )
    assert r.status_code == 201, r.text
    return r.json()


def _range(today, start=0, end=30):
    return {"from": str(today + timedelta(days=start)), "to": str(today + timedelta(days=end))}


# ---------- /reports/appointments ----------

def test_confirmed_appointments_report(book, admin_client, cashier_client, priest, today):
    first = book(days_ahead=3, scheduled_time="09:00 AM", assigned_priest_id=priest.id)
    second = book(days_ahead=3, scheduled_time="08:00 AM")
    pending = book(days_ahead=4)
    outside = book(days_ahead=60)
    for a in (first, second, outside):
        _pay(cashier_client, a["id"], 500)

    r = admin_client.get("/reports/appointments", params=_range(today))
    assert r.status_code == 200, r.text
    ids = [a["id"] for a in r.json()]
    # same day sorts by time
    assert ids == [second["id"], first["id"]]
    assert pending["id"] not in ids
    assert r.json()[1]["assigned_priest"]["name"] == "Fr. John Smith"


def test_appointments_report_scoping(book, admin_client, cashier_client, priest, priest_client, make_user, today):
    other = make_user("other@church.com", UserRole.PRIEST)
    mine = book(days_ahead=2, assigned_priest_id=priest.id)
    theirs = book(days_ahead=2, assigned_priest_id=other.id)
    for a in (mine, theirs):
        _pay(cashier_client, a["id"], 500)

    r = priest_client.get("/reports/appointments", params=_range(today))
    assert [a["id"] for a in r.json()] == [mine["id"]]

    # a priest cannot widen the scope with priest_id
    r = priest_client.get("/reports/appointments", params={**_range(today), "priest_id": other.id})
    assert [a["id"] for a in r.json()] == [mine["id"]]

    r = admin_client.get("/reports/appointments", params={**_range(today), "priest_id": other.id})
    assert [a["id"] for a in r.json()] == [theirs["id"]]

    assert cashier_client.get("/reports/appointments", params=_range(today)).status_code == 403


def test_report_date_bounds_are_required_and_ordered(admin_client, today):
    assert admin_client.get("/reports/appointments").status_code == 400
    assert admin_client.get("/reports/appointments", params={"from": str(today)}).status_code == 400
    assert admin_client.get("/reports/collections", params={"to": str(today)}).status_code == 400
    assert admin_client.get(
        "/reports/collections", params={"from": str(today), "to": str(today - timedelta(days=1))}
    ).status_code == 400
    assert admin_client.get(
        "/reports/collections", params={"from": "yesterday", "to": str(today)}
    ).status_code == 400


# ---------- /reports/collections ----------

def test_collections_report_totals(book, admin_client, cashier_client, today):
    a, b, c = book(), book(), book()
    _pay(cashier_client, a["id"], 500)
    _pay(cashier_client, b["id"], 300, "GCASH")
    _pay(admin_client, c["id"], 200)

    r = admin_client.get("/reports/collections", params=_range(today, 0, 0))
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["totals"] == {"cash": 700.0, "gcash": 300.0, "total": 1000.0}
    # oldest first
    assert [p["appointment_id"] for p in body["payments"]] == [a["id"], b["id"], c["id"]]
    assert body["payments"][0]["appointment"]["scheduled_date"] == a["scheduled_date"]


def test_collections_report_scoping(book, admin_client, cashier_client, cashier, make_user, login, priest_client, today):
    other = make_user("cashier2@church.com", UserRole.CASHIER)
    other_client = login(other.email)
    a, b = book(), book()
    _pay(cashier_client, a["id"], 500)
    _pay(other_client, b["id"], 800)

    body = cashier_client.get("/reports/collections", params=_range(today, 0, 0)).json()
    assert [p["appointment_id"] for p in body["payments"]] == [a["id"]]
    assert body["totals"]["total"] == 500.0

    # cashier_id is ignored for cashiers
    body = cashier_client.get(
        "/reports/collections", params={**_range(today, 0, 0), "cashier_id": other.id}
    ).json()
    assert body["totals"]["total"] == 500.0

    body = admin_client.get(
        "/reports/collections", params={**_range(today, 0, 0), "cashier_id": other.id}
    ).json()
    assert [p["appointment_id"] for p in body["payments"]] == [b["id"]]

    body = admin_client.get("/reports/collections", params=_range(today, 0, 0)).json()
    assert body["totals"]["total"] == 1300.0

    assert priest_client.get("/reports/collections", params=_range(today, 0, 0)).status_code == 403


def test_collections_report_respects_range(book, admin_client, cashier_client, database, today):
    a = book()
    _pay(cashier_client, a["id"], 500)
    with database.session() as db:
        db.execute(update(Payment).values(created_at=utcnow() - timedelta(days=10)))
        db.commit()

    assert admin_client.get(
        "/reports/collections", params=_range(today, -1, 0)
    ).json()["payments"] == []
    assert len(admin_client.get(
        "/reports/collections", params=_range(today, -15, 0)
    ).json()["payments"]) == 1
