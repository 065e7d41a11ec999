# backend/sacramentdesk/models/payment.py
from __future__ import annotations

import enum
from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import relationship

from sacramentdesk.db import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PaymentMethod(str, enum.Enum):
    CASH = "CASH"
    GCASH = "GCASH"


# ---- Model -------------------------------------------------------------------
class Payment(Base):
    """A fee collected against one appointment. Rows are never updated."""

    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)

    appointment_id = Column(
        Integer,
        ForeignKey("appointments.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    amount = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(Enum(PaymentMethod, name="paymentmethod"), nullable=False)
    gcash_ref_number = Column(String(100), nullable=True)
    receipt_number = Column(String(20), nullable=False, unique=True, index=True)

    processed_by_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)

    appointment = relationship("Appointment", back_populates="payments", lazy="joined")
    processed_by = relationship("User", lazy="joined")

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_payments_amount_positive"),
    )
