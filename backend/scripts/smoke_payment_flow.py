# scripts/smoke_payment_flow.py
"""
End-to-end smoke run against a live server:
login as cashier -> find an unpaid appointment -> pay it -> check CONFIRMED.

  python scripts/smoke_payment_flow.py --base-url http://127.0.0.1:8000
"""
from __future__ import annotations
import argparse, os, re, sys

import requests

RECEIPT_RE = re.compile(r"^RCP-\d{4}-\d{5}$")


def login(base: str, email: str, password: str) -> requests.Session:
    s = requests.Session()
    r = s.post(f"{base}/auth/login", json={"email": email, "password": password}, timeout=15)
    if r.status_code != 200:
        raise SystemExit(f"❌ login failed for {email}: {r.status_code} {r.text}")
    return s


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--base-url", default=os.getenv("BASE_URL", "http://127.0.0.1:8000"))
    ap.add_argument("--cashier-email", default="cashier@church.com")
    ap.add_argument("--admin-email", default="admin@church.com")
    ap.add_argument("--password", default=os.getenv("SMOKE_PASSWORD", "password123"))
    args = ap.parse_args()

    base = args.base_url.rstrip("/")

    # 1) Cashier looks for something to collect
    cashier = login(base, args.cashier_email, args.password)
    print("✅ cashier logged in")
    r = cashier.get(f"{base}/appointments", params={"unpaid": "true", "activeOnly": "true"}, timeout=15)
    if r.status_code != 200: print("❌ list unpaid failed", r.status_code, r.text, file=sys.stderr); return 1
    unpaid = r.json()
    if not unpaid:
        print("⚠️ no unpaid active appointments; seed some first"); return 1
    appt = unpaid[0]
    print(f"✅ unpaid appointment {appt['id']} ({appt['sacrament_type']}, fee {appt['fee']})")

    # 2) Pay it in full
    r = cashier.post(f"{base}/payments", json={
        "appointment_id": appt["id"], "amount": appt["fee"] or 1, "payment_method": "CASH",
    }, timeout=15)
    if r.status_code != 201: print("❌ payment failed", r.status_code, r.text, file=sys.stderr); return 1
    receipt = r.json()["receipt_number"]
    if not RECEIPT_RE.match(receipt): print("❌ unexpected receipt format", receipt, file=sys.stderr); return 1
    print(f"✅ payment recorded, receipt {receipt}")

    # 3) Admin sees it CONFIRMED
    admin = login(base, args.admin_email, args.password)
    r = admin.get(f"{base}/appointments/{appt['id']}", timeout=15)
    if r.status_code != 200 or r.json()["status"] != "CONFIRMED":
        print("❌ appointment not confirmed", r.status_code, r.text, file=sys.stderr); return 1
    print("✅ appointment CONFIRMED")

    r = cashier.get(f"{base}/payments/today", timeout=15)
    if r.status_code == 200: print("💰 today:", r.json()["summary"])

    cashier.post(f"{base}/auth/logout", timeout=15)
    admin.post(f"{base}/auth/logout", timeout=15)
    print("🎉 SMOKE PASSED"); return 0


if __name__ == "__main__":
    raise SystemExit(main())
