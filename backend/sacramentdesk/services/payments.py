# backend/sacramentdesk/services/payments.py
from __future__ import annotations

import logging
import secrets
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from sacramentdesk.models.appointment import Appointment, AppointmentStatus
from sacramentdesk.models.payment import Payment, PaymentMethod
from sacramentdesk.models.user import User
from sacramentdesk.schemas.payment import PaymentCreate, PaymentSummary
from sacramentdesk.timeutils import local_day_bounds, utcnow

logger = logging.getLogger(__name__)

RECEIPT_PREFIX = "RCP"
_RECEIPT_ATTEMPTS = 10


# ─────────────────────────────────────────────────────────────────────────────
# Utilities
# ─────────────────────────────────────────────────────────────────────────────

def _to_float(x: Any) -> float:
    if x is None:
        return 0.0
    if isinstance(x, Decimal):
        return float(x)
    return float(x)


def generate_receipt_number(year: Optional[int] = None) -> str:
    """RCP-YYYY-NNNNN with a random, zero-padded 5-digit suffix."""
    if year is None:
        year = utcnow().year
    return f"{RECEIPT_PREFIX}-{year}-{secrets.randbelow(100000):05d}"


def _unique_receipt_number(db: Session) -> str:
    for _ in range(_RECEIPT_ATTEMPTS):
        candidate = generate_receipt_number()
        exists = db.execute(
            select(Payment.id).where(Payment.receipt_number == candidate)
        ).first()
        if exists is None:
            return candidate
    raise RuntimeError("Could not allocate a unique receipt number")


def summarize(payments: Iterable[Payment]) -> PaymentSummary:
    cash = Decimal("0")
    gcash = Decimal("0")
    for p in payments:
        if p.payment_method == PaymentMethod.CASH:
            cash += p.amount
        elif p.payment_method == PaymentMethod.GCASH:
            gcash += p.amount
    return PaymentSummary(
        cash=_to_float(cash),
        gcash=_to_float(gcash),
        total=_to_float(cash + gcash),
    )


# ─────────────────────────────────────────────────────────────────────────────
# Public service API used by sacramentdesk/api/payments.py
# ─────────────────────────────────────────────────────────────────────────────

def create_payment(db: Session, user: User, payload: PaymentCreate) -> Optional[Payment]:
    """
    Record a payment and confirm its appointment in one transaction.

    Returns None when the appointment is missing or soft-deleted.
    """
    appt = (
        db.execute(
            select(Appointment).where(
                Appointment.id == payload.appointment_id,
                Appointment.deleted_at.is_(None),
            )
        )
        .unique()
        .scalars()
        .first()
    )
    if appt is None:
        return None
    if appt.status == AppointmentStatus.CANCELLED:
        raise ValueError("Cannot record a payment for a cancelled appointment")

    payment = Payment(
        appointment_id=appt.id,
        amount=payload.amount,
        payment_method=payload.payment_method,
        gcash_ref_number=payload.gcash_ref_number,
        receipt_number=_unique_receipt_number(db),
        processed_by_id=user.id,
    )
    try:
        db.add(payment)
        appt.status = AppointmentStatus.CONFIRMED
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(payment)
    logger.info(
        "payment %s recorded for appointment %s by user %s",
        payment.receipt_number,
        appt.id,
        user.id,
    )
    return payment


def list_payments_between(
    db: Session,
    start: date,
    end: date,
    tz: str,
    processed_by_id: Optional[int] = None,
    newest_first: bool = False,
) -> List[Payment]:
    lower, upper = local_day_bounds(start, end, tz)
    stmt = select(Payment).where(Payment.created_at >= lower, Payment.created_at < upper)
    if processed_by_id is not None:
        stmt = stmt.where(Payment.processed_by_id == processed_by_id)
    if newest_first:
        stmt = stmt.order_by(Payment.created_at.desc(), Payment.id.desc())
    else:
        stmt = stmt.order_by(Payment.created_at.asc(), Payment.id.asc())
    return list(db.execute(stmt).unique().scalars().all())


def todays_payments(db: Session, today: date, tz: str) -> List[Payment]:
    return list_payments_between(db, today, today, tz, newest_first=True)
