# backend/scripts/seed_sacrament_data.py
"""
Seed the default staff accounts and a few sample appointments.

✅ Features
- Admin / priest / cashier accounts (idempotent on email)
- Sample baptism and wedding bookings, the baptism already paid
- --dry-run prints what would be written and rolls back

Usage (from backend/):
  python scripts/seed_sacrament_data.py --dry-run
  python scripts/seed_sacrament_data.py --password 'change-me'
  python scripts/seed_sacrament_data.py --db-url sqlite:///./dev.db --create-tables
"""
from __future__ import annotations

import argparse
import sys
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path
from typing import Dict, List, Optional

# -----------------------------------------------------------------------------
# Paths & import setup (so "import sacramentdesk" works regardless of CWD)
# -----------------------------------------------------------------------------
HERE = Path(__file__).resolve()
BACKEND_ROOT = HERE.parents[1]          # .../backend

if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from sqlalchemy import select  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from sacramentdesk.config import get_settings  # noqa: E402
from sacramentdesk.db import Database  # noqa: E402
from sacramentdesk.models import (  # noqa: E402
    Appointment,
    AppointmentStatus,
    Payment,
    PaymentMethod,
    SacramentType,
    User,
    UserRole,
)
from sacramentdesk.services.auth import hash_password  # noqa: E402
from sacramentdesk.services.payments import generate_receipt_number  # noqa: E402
from sacramentdesk.timeutils import today_local  # noqa: E402

STAFF: List[Dict[str, object]] = [
    {"email": "admin@church.com", "name": "Admin User", "role": UserRole.ADMIN},
    {"email": "priest@church.com", "name": "Fr. John Smith", "role": UserRole.PRIEST},
    {"email": "cashier@church.com", "name": "Maria Santos", "role": UserRole.CASHIER},
]


# -----------------------------------------------------------------------------
# CLI
# -----------------------------------------------------------------------------
def _parse_date(s: str) -> date:
    return date.fromisoformat(s)


parser = argparse.ArgumentParser(description="Seed SacramentDesk sample data.")
parser.add_argument("--db-url", dest="db_url", help="SQLAlchemy URL (defaults to DATABASE_URL)")
parser.add_argument("--password", dest="password", default="password123",
                    help="Password for every seeded account")
parser.add_argument("--baptism-date", dest="baptism_date", type=_parse_date,
                    help="Defaults to two weeks from today")
parser.add_argument("--wedding-date", dest="wedding_date", type=_parse_date,
                    help="Defaults to thirty days from today")
parser.add_argument("--create-tables", dest="create_tables", action="store_true",
                    help="Create tables directly instead of relying on Alembic")
parser.add_argument("--dry-run", dest="dry_run", action="store_true")


# -----------------------------------------------------------------------------
# Seeding
# -----------------------------------------------------------------------------
def _upsert_staff(db: Session, password: str) -> Dict[UserRole, User]:
    out: Dict[UserRole, User] = {}
    pw_hash = hash_password(password)
    for entry in STAFF:
        user: Optional[User] = db.execute(
            select(User).where(User.email == entry["email"])
        ).scalars().first()
        if user is None:
            user = User(
                email=entry["email"],
                name=entry["name"],
                role=entry["role"],
                password_hash=pw_hash,
            )
            db.add(user)
            db.flush()
            print(f"  + user {user.email} ({user.role.value})")
        else:
            print(f"  = user {user.email} already present")
        out[user.role] = user
    return out


def _seed_appointments(db: Session, staff: Dict[UserRole, User], args: argparse.Namespace) -> None:
    admin = staff[UserRole.ADMIN]
    priest = staff[UserRole.PRIEST]
    cashier = staff[UserRole.CASHIER]

    baptism = Appointment(
        sacrament_type=SacramentType.BAPTISM,
        participant_name="Baby John Doe",
        participant_phone="09123456789",
        participant_email="parent@email.com",
        scheduled_date=args.baptism_date,
        scheduled_time="10:00 AM",
        location="Main Church",
        notes="Parents: John and Jane Doe",
        status=AppointmentStatus.CONFIRMED,
        fee=Decimal("500"),
        created_by_id=admin.id,
        assigned_priest_id=priest.id,
    )
    wedding = Appointment(
        sacrament_type=SacramentType.WEDDING,
        participant_name="Mark & Lisa Garcia",
        participant_phone="09187654321",
        participant_email="mark@email.com",
        scheduled_date=args.wedding_date,
        scheduled_time="2:00 PM",
        location="Main Church",
        notes="Wedding ceremony with 100 guests",
        status=AppointmentStatus.PENDING,
        fee=Decimal("5000"),
        created_by_id=admin.id,
    )
    db.add_all([baptism, wedding])
    db.flush()
    print(f"  + appointment {baptism.id} baptism on {baptism.scheduled_date}")
    print(f"  + appointment {wedding.id} wedding on {wedding.scheduled_date}")

    payment = Payment(
        appointment_id=baptism.id,
        amount=Decimal("500"),
        payment_method=PaymentMethod.CASH,
        receipt_number=generate_receipt_number(),
        processed_by_id=cashier.id,
    )
    db.add(payment)
    db.flush()
    print(f"  + payment {payment.receipt_number} for appointment {baptism.id}")


def main(argv: Optional[List[str]] = None) -> int:
    args = parser.parse_args(argv)
    settings = get_settings()
    url = args.db_url or settings.database_url

    # Sample bookings must be upcoming or the first read auto-completes them
    today = today_local(settings.timezone)
    args.baptism_date = args.baptism_date or today + timedelta(days=14)
    args.wedding_date = args.wedding_date or today + timedelta(days=30)

    database = Database(url)
    if args.create_tables:
        database.create_all()

    print(f"Seeding {url} {'(dry run)' if args.dry_run else ''}")
    with database.session() as db:
        try:
            staff = _upsert_staff(db, args.password)
            _seed_appointments(db, staff, args)
            if args.dry_run:
                db.rollback()
                print("Dry run: rolled back.")
            else:
                db.commit()
                print("Seed completed successfully!")
        except Exception:
            db.rollback()
            raise
    database.dispose()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
