# backend/sacramentdesk/api/appointments.py
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from sacramentdesk.db import get_db
from sacramentdesk.dependencies import get_current_user, get_today, require_roles
from sacramentdesk.models.appointment import Appointment, AppointmentStatus
from sacramentdesk.models.user import User, UserRole
from sacramentdesk.schemas.appointment import (
    AppointmentCreate,
    AppointmentDetail,
    AppointmentRead,
    AppointmentUpdate,
)
from sacramentdesk.schemas.auth import MessageResponse
from sacramentdesk.services import appointments as svc

router = APIRouter(prefix="/appointments", tags=["Appointments"])
logger = logging.getLogger(__name__)

# ─────────────────────────────────────────────────────────────────────────────
# OpenAPI "examples" for request body
# ─────────────────────────────────────────────────────────────────────────────
CREATE_EXAMPLES: Dict[str, Dict[str, Any]] = {
    "baptism": {
        "summary": "Baptism",
        "description": "Infant baptism with the default parish location.",
        "value": {
            "sacrament_type": "BAPTISM",
            "participant_name": "Baby John Doe",
            "participant_phone": "09123456789",
            "participant_email": "parent@email.com",
            "barangay": "Poblacion",
            "scheduled_date": "2026-02-15",
            "scheduled_time": "10:00 AM",
            "notes": "Parents: John and Jane Doe",
            "fee": 500,
        },
    },
    "wedding": {
        "summary": "Wedding",
        "description": "Wedding with an assigned priest.",
        "value": {
            "sacrament_type": "WEDDING",
            "participant_name": "Mark & Lisa Garcia",
            "scheduled_date": "2026-03-20",
            "scheduled_time": "2:00 PM",
            "location": "Main Church",
            "fee": 5000,
            "assigned_priest_id": 2,
        },
    },
}

OPENAPI_REQUEST_EXAMPLES = {
    "requestBody": {
        "content": {
            "application/json": {
                "examples": CREATE_EXAMPLES
            }
        }
    }
}


@router.get("", response_model=List[AppointmentRead])
def list_appointments(
    status_: Optional[AppointmentStatus] = Query(None, alias="status"),
    active_only: bool = Query(False, alias="activeOnly"),
    unpaid: bool = False,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
    today: date = Depends(get_today),
) -> List[Appointment]:
    return svc.list_appointments(
        db,
        user,
        today,
        status=status_,
        active_only=active_only,
        unpaid=unpaid,
    )


@router.post(
    "",
    response_model=AppointmentRead,
    status_code=status.HTTP_201_CREATED,
    openapi_extra=OPENAPI_REQUEST_EXAMPLES,  # show examples in Swagger
)
def create_appointment(
    payload: AppointmentCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
) -> Appointment:
    try:
        appt = svc.create_appointment(db, user, payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info(
        "appointment %s created type=%s date=%s by user %s",
        appt.id,
        appt.sacrament_type.value,
        appt.scheduled_date,
        user.id,
    )
    return appt


@router.get("/{appointment_id}", response_model=AppointmentDetail)
def get_appointment(
    appointment_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
    today: date = Depends(get_today),
) -> Appointment:
    try:
        appt = svc.get_appointment_for(db, user, appointment_id, today)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    if not appt:
        raise HTTPException(status_code=404, detail="Appointment not found")
    return appt


@router.put("/{appointment_id}", response_model=AppointmentRead)
def update_appointment(
    appointment_id: int,
    payload: AppointmentUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
) -> Appointment:
    # Log only the fields being changed
    logger.info(
        "update_appointment id=%s by user %s fields=%s",
        appointment_id,
        user.id,
        sorted(payload.model_dump(exclude_unset=True).keys()),
    )
    try:
        appt = svc.update_appointment(db, user, appointment_id, payload)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not appt:
        raise HTTPException(status_code=404, detail="Appointment not found")
    return appt


@router.delete("/{appointment_id}", response_model=MessageResponse)
def cancel_appointment(
    appointment_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_roles(UserRole.ADMIN)),
) -> MessageResponse:
    ok = svc.cancel_appointment(db, appointment_id)
    if not ok:
        raise HTTPException(status_code=404, detail="Appointment not found")
    logger.info("appointment %s cancelled by admin %s", appointment_id, admin.id)
    return MessageResponse(message="Appointment cancelled successfully")
