# backend/sacramentdesk/api/auth.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from sacramentdesk.config import Settings
from sacramentdesk.db import get_db
from sacramentdesk.dependencies import get_app_settings, get_current_user, get_session_token
from sacramentdesk.models.user import User
from sacramentdesk.schemas.auth import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    SessionResponse,
)
from sacramentdesk.schemas.user import UserRead
from sacramentdesk.services import auth as svc

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger(__name__)


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> LoginResponse:
    try:
        result = svc.login(db, payload.email, payload.password, settings.session_ttl_days)
    except PermissionError as e:
        logger.info("login refused for inactive account email=%s", payload.email)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))

    if result is None:
        logger.info("login failed email=%s", payload.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password"
        )

    response.set_cookie(
        key=settings.session_cookie_name,
        value=result.token,
        max_age=settings.session_ttl_days * 24 * 60 * 60,
        expires=result.expires_at,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
    logger.info("login ok user_id=%s role=%s", result.user.id, result.user.role.value)
    return LoginResponse(message="Login successful", user=UserRead.model_validate(result.user))


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    user: User = Depends(get_current_user),
    token: str | None = Depends(get_session_token),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> MessageResponse:
    svc.logout(db, token)
    response.delete_cookie(settings.session_cookie_name, path="/")
    logger.info("logout user_id=%s", user.id)
    return MessageResponse(message="Logged out successfully")


@router.get("/session", response_model=SessionResponse)
def current_session(user: User = Depends(get_current_user)) -> SessionResponse:
    return SessionResponse(user=UserRead.model_validate(user))
