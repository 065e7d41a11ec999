"""
Shared FastAPI dependency helpers.

`get_current_user` resolves the session cookie to an ACTIVE user (401
otherwise) and `require_roles` layers a role check on top of it (403).
"""

from datetime import date
from typing import Callable

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from sacramentdesk.config import Settings
from sacramentdesk.db import get_db
from sacramentdesk.models.user import User, UserRole
from sacramentdesk.services import auth as auth_svc
from sacramentdesk.timeutils import today_local


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_today(settings: Settings = Depends(get_app_settings)) -> date:
    """Today's date in the parish time zone."""
    return today_local(settings.timezone)


def get_session_token(
    request: Request, settings: Settings = Depends(get_app_settings)
) -> str | None:
    return request.cookies.get(settings.session_cookie_name)


def get_current_user(
    db: Session = Depends(get_db),
    token: str | None = Depends(get_session_token),
) -> User:
    user = auth_svc.resolve_session(db, token)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return user


def require_roles(*roles: UserRole) -> Callable[..., User]:
    """Dependency factory restricting an endpoint to the given roles."""
    allowed = set(roles)

    def _inner(user: User = Depends(get_current_user)) -> User:
        if user.role not in allowed:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
        return user

    return _inner
