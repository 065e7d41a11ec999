# backend/sacramentdesk/services/auth.py
"""
Password hashing and server-side sessions.

Login and logout return plain values; applying them to a cookie is the
router's job.
"""
from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

import bcrypt
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from sacramentdesk.models.user import User, UserSession, UserStatus
from sacramentdesk.timeutils import as_utc, utcnow

logger = logging.getLogger(__name__)

SESSION_TOKEN_BYTES = 32


@dataclass(frozen=True)
class LoginResult:
    token: str
    expires_at: datetime
    user: User


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Malformed hash in the database
        logger.warning("password hash for a user could not be parsed")
        return False


def generate_session_token() -> str:
    return secrets.token_hex(SESSION_TOKEN_BYTES)


# ─────────────────────────────────────────────────────────────────────────────
# Sessions
# ─────────────────────────────────────────────────────────────────────────────

def create_session(db: Session, user: User, ttl_days: int) -> UserSession:
    now = utcnow()

    # Drop this user's stale sessions while we're here
    db.execute(
        delete(UserSession).where(
            UserSession.user_id == user.id,
            UserSession.expires_at < now,
        )
    )

    sess = UserSession(
        token=generate_session_token(),
        user_id=user.id,
        expires_at=now + timedelta(days=ttl_days),
    )
    db.add(sess)
    db.commit()
    return sess


def resolve_session(db: Session, token: Optional[str]) -> Optional[User]:
    """
    Return the user behind `token`, or None.

    Expired sessions and sessions of INACTIVE users are deleted on sight.
    """
    if not token:
        return None

    sess = db.execute(select(UserSession).where(UserSession.token == token)).scalars().first()
    if sess is None:
        return None

    if as_utc(sess.expires_at) <= utcnow():
        db.delete(sess)
        db.commit()
        return None

    user = sess.user
    if user is None or user.status != UserStatus.ACTIVE:
        db.delete(sess)
        db.commit()
        return None

    return user


def delete_user_sessions(db: Session, user_id: int) -> int:
    result = db.execute(delete(UserSession).where(UserSession.user_id == user_id))
    return result.rowcount or 0


# ─────────────────────────────────────────────────────────────────────────────
# Public service API used by sacramentdesk/api/auth.py
# ─────────────────────────────────────────────────────────────────────────────

def login(db: Session, email: str, password: str, ttl_days: int) -> Optional[LoginResult]:
    """
    Check credentials and open a session.

    Returns None on unknown email or wrong password; raises PermissionError
    when the credentials are right but the account is INACTIVE.
    """
    user = db.execute(select(User).where(User.email == email.strip().lower())).scalars().first()
    if user is None or not verify_password(password, user.password_hash):
        return None

    if user.status != UserStatus.ACTIVE:
        raise PermissionError(
            "Your account has been deactivated. Please contact an administrator."
        )

    sess = create_session(db, user, ttl_days)
    return LoginResult(token=sess.token, expires_at=as_utc(sess.expires_at), user=user)


def logout(db: Session, token: Optional[str]) -> None:
    if not token:
        return
    db.execute(delete(UserSession).where(UserSession.token == token))
    db.commit()
