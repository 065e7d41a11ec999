# backend/sacramentdesk/services/reports.py
from __future__ import annotations

from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from sacramentdesk.models.appointment import Appointment, AppointmentStatus
from sacramentdesk.models.payment import Payment
from sacramentdesk.models.user import User, UserRole
from sacramentdesk.schemas.payment import PaymentSummary
from sacramentdesk.services.payments import list_payments_between, summarize


def _check_range(date_from: date, date_to: date) -> None:
    if date_from > date_to:
        raise ValueError("'from' must be on or before 'to'")


def confirmed_appointments(
    db: Session,
    user: User,
    date_from: date,
    date_to: date,
    priest_id: Optional[int] = None,
) -> List[Appointment]:
    """CONFIRMED bookings scheduled within the range; priests see only their own."""
    _check_range(date_from, date_to)

    conds = [
        Appointment.status == AppointmentStatus.CONFIRMED,
        Appointment.scheduled_date >= date_from,
        Appointment.scheduled_date <= date_to,
        Appointment.deleted_at.is_(None),
    ]
    if user.role == UserRole.PRIEST:
        conds.append(Appointment.assigned_priest_id == user.id)
    elif user.role == UserRole.ADMIN and priest_id is not None:
        conds.append(Appointment.assigned_priest_id == priest_id)

    stmt = (
        select(Appointment)
        .where(*conds)
        .order_by(
            Appointment.scheduled_date.asc(),
            Appointment.scheduled_time.asc(),
            Appointment.id.asc(),
        )
    )
    return list(db.execute(stmt).unique().scalars().all())


def collections(
    db: Session,
    user: User,
    date_from: date,
    date_to: date,
    tz: str,
    cashier_id: Optional[int] = None,
) -> Tuple[List[Payment], PaymentSummary]:
    """Payments taken within the range (local days, inclusive) plus totals by method."""
    _check_range(date_from, date_to)

    processed_by: Optional[int] = None
    if user.role == UserRole.CASHIER:
        processed_by = user.id
    elif user.role == UserRole.ADMIN:
        processed_by = cashier_id

    payments = list_payments_between(db, date_from, date_to, tz, processed_by_id=processed_by)
    return payments, summarize(payments)
