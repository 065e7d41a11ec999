# backend/sacramentdesk/services/appointments.py
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session, selectinload

from sacramentdesk.models.appointment import (
    DEFAULT_CITY,
    DEFAULT_LOCATION,
    DEFAULT_PROVINCE,
    FINAL_STATUSES,
    Appointment,
    AppointmentStatus,
)
from sacramentdesk.models.user import User, UserRole, UserStatus
from sacramentdesk.schemas.appointment import AppointmentCreate, AppointmentUpdate
from sacramentdesk.timeutils import utcnow

logger = logging.getLogger(__name__)

# Columns that may not be cleared through an update
_REQUIRED_FIELDS = {
    "sacrament_type",
    "participant_name",
    "scheduled_date",
    "scheduled_time",
    "fee",
    "status",
}


# ─────────────────────────────────────────────────────────────────────────────
# Utilities
# ─────────────────────────────────────────────────────────────────────────────

def _live():
    return Appointment.deleted_at.is_(None)


def _ensure_priest(db: Session, priest_id: Optional[int]) -> None:
    if priest_id is None:
        return
    priest = db.get(User, priest_id)
    if priest is None or priest.role != UserRole.PRIEST:
        raise ValueError("assigned_priest_id does not refer to a priest")
    if priest.status != UserStatus.ACTIVE:
        raise ValueError("assigned priest is inactive")


def complete_past_appointments(db: Session, today: date) -> int:
    """Mark every live appointment dated before `today` COMPLETED unless already final."""
    result = db.execute(
        update(Appointment)
        .where(
            Appointment.scheduled_date < today,
            Appointment.status.not_in(FINAL_STATUSES),
            _live(),
        )
        .values(status=AppointmentStatus.COMPLETED, updated_at=utcnow())
        .execution_options(synchronize_session="fetch")
    )
    db.commit()
    swept = result.rowcount or 0
    if swept:
        logger.info("auto-completed %s past appointment(s) before %s", swept, today)
    return swept


# ─────────────────────────────────────────────────────────────────────────────
# Public service API used by sacramentdesk/api/appointments.py
# ─────────────────────────────────────────────────────────────────────────────

def list_appointments(
    db: Session,
    user: User,
    today: date,
    status: Optional[AppointmentStatus] = None,
    active_only: bool = False,
    unpaid: bool = False,
) -> List[Appointment]:
    complete_past_appointments(db, today)

    stmt = select(Appointment).where(_live())

    # Priests only ever see their own assignments
    if user.role == UserRole.PRIEST:
        stmt = stmt.where(Appointment.assigned_priest_id == user.id)

    if active_only:
        # "Active" wins over an explicit status filter
        stmt = stmt.where(
            Appointment.scheduled_date >= today,
            Appointment.status != AppointmentStatus.COMPLETED,
        )
    elif status is not None:
        stmt = stmt.where(Appointment.status == status)

    if unpaid:
        stmt = stmt.where(~Appointment.payments.any())

    stmt = stmt.order_by(Appointment.scheduled_date.asc(), Appointment.id.asc())
    return list(db.execute(stmt).unique().scalars().all())


def get_appointment(db: Session, appointment_id: int) -> Optional[Appointment]:
    return (
        db.execute(
            select(Appointment)
            .options(selectinload(Appointment.payments))
            .where(Appointment.id == appointment_id, _live())
        )
        .unique()
        .scalars()
        .first()
    )


def get_appointment_for(
    db: Session, user: User, appointment_id: int, today: date
) -> Optional[Appointment]:
    complete_past_appointments(db, today)

    appt = get_appointment(db, appointment_id)
    if appt is None:
        return None

    if user.role == UserRole.CASHIER:
        raise PermissionError("Access denied")
    if user.role == UserRole.PRIEST and appt.assigned_priest_id != user.id:
        raise PermissionError("Access denied")
    return appt


def create_appointment(db: Session, user: User, payload: AppointmentCreate) -> Appointment:
    _ensure_priest(db, payload.assigned_priest_id)

    appt = Appointment(
        sacrament_type=payload.sacrament_type,
        participant_name=payload.participant_name.strip(),
        participant_phone=payload.participant_phone,
        participant_email=payload.participant_email,
        barangay=payload.barangay,
        city=payload.city or DEFAULT_CITY,
        province=payload.province or DEFAULT_PROVINCE,
        scheduled_date=payload.scheduled_date,
        scheduled_time=payload.scheduled_time.strip(),
        location=payload.location or DEFAULT_LOCATION,
        notes=payload.notes,
        status=AppointmentStatus.PENDING,
        fee=payload.fee,
        created_by_id=user.id,
        assigned_priest_id=payload.assigned_priest_id,
    )
    db.add(appt)
    db.commit()
    db.refresh(appt)
    return appt


def update_appointment(
    db: Session, user: User, appointment_id: int, payload: AppointmentUpdate
) -> Optional[Appointment]:
    appt = get_appointment(db, appointment_id)
    if appt is None:
        return None

    patch: Dict[str, Any] = payload.model_dump(exclude_unset=True)

    if user.role == UserRole.CASHIER:
        raise PermissionError("Only administrators can update appointments")

    if user.role == UserRole.PRIEST:
        if appt.assigned_priest_id != user.id:
            raise PermissionError("Access denied")
        extra = sorted(set(patch) - {"status"})
        if extra:
            raise PermissionError(
                "Priests may only change the status of an appointment "
                f"(rejected fields: {', '.join(extra)})"
            )
        # Cancelling and reopening stay with administrators
        if appt.status == AppointmentStatus.CANCELLED:
            raise PermissionError("Cancelled appointments can only be changed by an administrator")
        if patch.get("status") == AppointmentStatus.CANCELLED:
            raise PermissionError("Only administrators can cancel appointments")

    if "assigned_priest_id" in patch:
        _ensure_priest(db, patch["assigned_priest_id"])

    for field, value in patch.items():
        if value is None and field in _REQUIRED_FIELDS:
            continue
        if isinstance(value, str) and field in ("participant_name", "scheduled_time"):
            value = value.strip()
        setattr(appt, field, value)

    db.commit()
    db.refresh(appt)
    return appt


def cancel_appointment(db: Session, appointment_id: int) -> bool:
    appt = get_appointment(db, appointment_id)
    if appt is None:
        return False
    appt.status = AppointmentStatus.CANCELLED
    db.commit()
    return True
