# backend/sacramentdesk/api/reports.py
from __future__ import annotations

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from sacramentdesk.config import Settings
from sacramentdesk.db import get_db
from sacramentdesk.dependencies import get_app_settings, require_roles
from sacramentdesk.models.appointment import Appointment
from sacramentdesk.models.user import User, UserRole
from sacramentdesk.schemas.appointment import AppointmentRead
from sacramentdesk.schemas.payment import CollectionsReport, PaymentRead
from sacramentdesk.services import reports as svc

router = APIRouter(prefix="/reports", tags=["Reports"])


# ---------- helpers ----------
def _require_range(date_from: Optional[date], date_to: Optional[date]) -> None:
    if date_from is None or date_to is None:
        raise HTTPException(status_code=400, detail="From and To dates are required")


# ---------- /reports/appointments ----------
@router.get("/appointments", response_model=List[AppointmentRead])
def confirmed_appointments(
    date_from: Optional[date] = Query(None, alias="from"),
    date_to: Optional[date] = Query(None, alias="to"),
    priest_id: Optional[int] = None,
    db: Session = Depends(get_db),
    user: User = Depends(require_roles(UserRole.ADMIN, UserRole.PRIEST)),
) -> List[Appointment]:
    _require_range(date_from, date_to)
    try:
        return svc.confirmed_appointments(db, user, date_from, date_to, priest_id=priest_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


# ---------- /reports/collections ----------
@router.get("/collections", response_model=CollectionsReport)
def collections(
    date_from: Optional[date] = Query(None, alias="from"),
    date_to: Optional[date] = Query(None, alias="to"),
    cashier_id: Optional[int] = None,
    db: Session = Depends(get_db),
    user: User = Depends(require_roles(UserRole.ADMIN, UserRole.CASHIER)),
    settings: Settings = Depends(get_app_settings),
) -> CollectionsReport:
    _require_range(date_from, date_to)
    try:
        payments, totals = svc.collections(
            db, user, date_from, date_to, settings.timezone, cashier_id=cashier_id
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return CollectionsReport(
        payments=[PaymentRead.model_validate(p) for p in payments],
        totals=totals,
    )
