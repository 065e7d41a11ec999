# backend/sacramentdesk/models/appointment.py
"""SQLAlchemy model for sacrament appointments.

An appointment is booked PENDING, becomes CONFIRMED once a payment is
recorded against it (service-layer logic, not here in the model), and ends
COMPLETED or CANCELLED.
"""

from __future__ import annotations

import enum
from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from sacramentdesk.db import Base

DEFAULT_CITY = "Urdaneta City"
DEFAULT_PROVINCE = "Pangasinan"
DEFAULT_LOCATION = "Immaculate Conception Cathedral Parish"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SacramentType(str, enum.Enum):
    """Enumeration of bookable sacraments."""
    BAPTISM = "BAPTISM"
    WEDDING = "WEDDING"
    CONFIRMATION = "CONFIRMATION"
    FUNERAL = "FUNERAL"
    FIRST_COMMUNION = "FIRST_COMMUNION"
    ANOINTING_OF_SICK = "ANOINTING_OF_SICK"
    MASS_INTENTION = "MASS_INTENTION"


class AppointmentStatus(str, enum.Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


# Statuses the auto-completion sweep never touches
FINAL_STATUSES = (AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED)


class Appointment(Base):
    """Database table representing a single sacrament booking."""

    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)

    sacrament_type = Column(
        Enum(SacramentType, name="sacramenttype"), nullable=False, index=True
    )

    # Participant contact & address
    participant_name = Column(String(200), nullable=False)
    participant_phone = Column(String(50), nullable=True)
    participant_email = Column(String(255), nullable=True)
    barangay = Column(String(120), nullable=True)
    city = Column(String(120), nullable=True, default=DEFAULT_CITY)
    province = Column(String(120), nullable=True, default=DEFAULT_PROVINCE)

    scheduled_date = Column(Date, nullable=False, index=True)
    # Free-form, e.g. "10:00 AM"
    scheduled_time = Column(String(20), nullable=False)
    location = Column(String(255), nullable=True, default=DEFAULT_LOCATION)
    notes = Column(Text, nullable=True)

    fee = Column(Numeric(12, 2), nullable=False, default=0)
    status = Column(
        Enum(AppointmentStatus, name="appointmentstatus"),
        nullable=False,
        default=AppointmentStatus.PENDING,
        index=True,
    )

    assigned_priest_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_by_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
    )

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    # --- Relationships --------------------------------------------------- #
    assigned_priest = relationship("User", foreign_keys=[assigned_priest_id], lazy="joined")
    created_by = relationship("User", foreign_keys=[created_by_id], lazy="joined")
    payments = relationship(
        "Payment",
        back_populates="appointment",
        order_by="Payment.created_at",
    )

    __table_args__ = (
        CheckConstraint("fee >= 0", name="ck_appointments_fee_non_negative"),
    )

    def __repr__(self) -> str:  # pragma: no cover
        return (
            f"<Appointment(id={self.id}, type={self.sacrament_type}, "
            f"date={self.scheduled_date}, status={self.status})>"
        )
