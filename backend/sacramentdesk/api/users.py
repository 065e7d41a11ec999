# backend/sacramentdesk/api/users.py
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from sacramentdesk.db import get_db
from sacramentdesk.dependencies import get_current_user, require_roles
from sacramentdesk.models.user import User, UserRole, UserStatus
from sacramentdesk.schemas.user import UserCreate, UserRead, UserUpdate
from sacramentdesk.services import users as svc

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)

admin_only = require_roles(UserRole.ADMIN)


@router.get("", response_model=List[UserRead])
def list_users(
    role: Optional[UserRole] = None,
    status_: Optional[UserStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    _: User = Depends(admin_only),
) -> List[User]:
    return svc.list_users(db, role=role, status=status_)


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(admin_only),
) -> User:
    try:
        user = svc.create_user(db, payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info("user %s created (role=%s) by admin %s", user.id, user.role.value, admin.id)
    return user


@router.get("/{user_id}", response_model=UserRead)
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
) -> User:
    if current.role != UserRole.ADMIN and current.id != user_id:
        raise HTTPException(status_code=403, detail="Access denied")
    user = svc.get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.put("/{user_id}", response_model=UserRead)
def update_user(
    user_id: int,
    payload: UserUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(admin_only),
) -> User:
    try:
        user = svc.update_user(db, user_id, payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    logger.info(
        "user %s updated by admin %s fields=%s",
        user_id,
        admin.id,
        sorted(payload.model_dump(exclude_unset=True, exclude={"password"}).keys()),
    )
    return user
