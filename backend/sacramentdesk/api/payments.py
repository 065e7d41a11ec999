# backend/sacramentdesk/api/payments.py
from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from sacramentdesk.config import Settings
from sacramentdesk.db import get_db
from sacramentdesk.dependencies import get_app_settings, get_today, require_roles
from sacramentdesk.models.payment import Payment
from sacramentdesk.models.user import User, UserRole
from sacramentdesk.schemas.payment import PaymentCreate, PaymentRead, TodayPayments
from sacramentdesk.services import payments as svc

router = APIRouter(prefix="/payments", tags=["Payments"])

cashier_or_admin = require_roles(UserRole.ADMIN, UserRole.CASHIER)


@router.post("", response_model=PaymentRead, status_code=status.HTTP_201_CREATED)
def create_payment(
    payload: PaymentCreate,
    db: Session = Depends(get_db),
    user: User = Depends(cashier_or_admin),
) -> Payment:
    try:
        payment = svc.create_payment(db, user, payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if payment is None:
        raise HTTPException(status_code=404, detail="Appointment not found")
    return payment


@router.get("/today", response_model=TodayPayments)
def todays_payments(
    db: Session = Depends(get_db),
    _: User = Depends(cashier_or_admin),
    today: date = Depends(get_today),
    settings: Settings = Depends(get_app_settings),
) -> TodayPayments:
    payments = svc.todays_payments(db, today, settings.timezone)
    return TodayPayments(
        payments=[PaymentRead.model_validate(p) for p in payments],
        summary=svc.summarize(payments),
    )
