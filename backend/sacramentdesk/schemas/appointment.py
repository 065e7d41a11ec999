# backend/sacramentdesk/schemas/appointment.py
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from sacramentdesk.models.appointment import AppointmentStatus, SacramentType
from sacramentdesk.models.payment import PaymentMethod
from sacramentdesk.schemas.user import UserBrief, UserContact


# ─────────────────────────────────────────────────────────────────────────────
# Base fields shared by create/read
# ─────────────────────────────────────────────────────────────────────────────

class _AppointmentBase(BaseModel):
    sacrament_type: SacramentType
    participant_name: str = Field(..., min_length=1, max_length=200)
    participant_phone: Optional[str] = None
    participant_email: Optional[str] = None
    barangay: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    scheduled_date: date
    scheduled_time: str = Field(..., min_length=1, max_length=20)
    location: Optional[str] = None
    notes: Optional[str] = None
    assigned_priest_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class AppointmentCreate(_AppointmentBase):
    # New bookings always start PENDING; a status in the payload is ignored.
    fee: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)


# ─────────────────────────────────────────────────────────────────────────────
# Update model (PUT) – every field optional, only sent keys are applied
# ─────────────────────────────────────────────────────────────────────────────

class AppointmentUpdate(BaseModel):
    sacrament_type: Optional[SacramentType] = None
    participant_name: Optional[str] = Field(None, min_length=1, max_length=200)
    participant_phone: Optional[str] = None
    participant_email: Optional[str] = None
    barangay: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    scheduled_date: Optional[date] = None
    scheduled_time: Optional[str] = Field(None, min_length=1, max_length=20)
    location: Optional[str] = None
    notes: Optional[str] = None
    fee: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    status: Optional[AppointmentStatus] = None
    assigned_priest_id: Optional[int] = None


# ─────────────────────────────────────────────────────────────────────────────
# Read models (returned by API)
# ─────────────────────────────────────────────────────────────────────────────

class AppointmentRead(_AppointmentBase):
    id: int
    fee: float
    status: AppointmentStatus
    created_by_id: int
    assigned_priest: Optional[UserBrief] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AppointmentPayment(BaseModel):
    id: int
    amount: float
    payment_method: PaymentMethod
    gcash_ref_number: Optional[str] = None
    receipt_number: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AppointmentDetail(AppointmentRead):
    created_by: Optional[UserContact] = None
    payments: List[AppointmentPayment] = []
