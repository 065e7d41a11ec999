# backend/sacramentdesk/schemas/payment.py
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from sacramentdesk.models.appointment import SacramentType
from sacramentdesk.models.payment import PaymentMethod
from sacramentdesk.schemas.user import UserBrief


class PaymentCreate(BaseModel):
    appointment_id: int
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    payment_method: PaymentMethod
    gcash_ref_number: Optional[str] = Field(None, max_length=100)


class PaymentAppointment(BaseModel):
    id: int
    participant_name: str
    sacrament_type: SacramentType
    scheduled_date: date

    model_config = ConfigDict(from_attributes=True)


class PaymentRead(BaseModel):
    id: int
    appointment_id: int
    amount: float
    payment_method: PaymentMethod
    gcash_ref_number: Optional[str] = None
    receipt_number: str
    processed_by_id: int
    created_at: datetime
    appointment: PaymentAppointment
    processed_by: UserBrief

    model_config = ConfigDict(from_attributes=True)


class PaymentSummary(BaseModel):
    cash: float = 0.0
    gcash: float = 0.0
    total: float = 0.0


class TodayPayments(BaseModel):
    payments: List[PaymentRead]
    summary: PaymentSummary


class CollectionsReport(BaseModel):
    payments: List[PaymentRead]
    totals: PaymentSummary
