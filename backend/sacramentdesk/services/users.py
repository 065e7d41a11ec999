# backend/sacramentdesk/services/users.py
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sacramentdesk.models.user import User, UserRole, UserStatus
from sacramentdesk.schemas.user import UserCreate, UserUpdate
from sacramentdesk.services.auth import delete_user_sessions, hash_password


def _email_taken(db: Session, email: str, exclude_id: Optional[int] = None) -> bool:
    stmt = select(User.id).where(User.email == email)
    if exclude_id is not None:
        stmt = stmt.where(User.id != exclude_id)
    return db.execute(stmt).first() is not None


def list_users(
    db: Session,
    role: Optional[UserRole] = None,
    status: Optional[UserStatus] = None,
) -> List[User]:
    stmt = select(User)
    if role is not None:
        stmt = stmt.where(User.role == role)
    if status is not None:
        stmt = stmt.where(User.status == status)
    return list(db.execute(stmt.order_by(User.name.asc(), User.id.asc())).scalars().all())


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)


def create_user(db: Session, payload: UserCreate) -> User:
    email = payload.email.strip().lower()
    if _email_taken(db, email):
        raise ValueError("Email already exists")

    user = User(
        name=payload.name.strip(),
        email=email,
        password_hash=hash_password(payload.password),
        role=payload.role,
        status=payload.status,
        availability=payload.availability,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValueError("Email already exists")
    db.refresh(user)
    return user


def update_user(db: Session, user_id: int, payload: UserUpdate) -> Optional[User]:
    user = db.get(User, user_id)
    if not user:
        return None

    if payload.email:
        email = payload.email.strip().lower()
        if _email_taken(db, email, exclude_id=user.id):
            raise ValueError("Email already exists")
        user.email = email
    if payload.name:
        user.name = payload.name.strip()
    if payload.role is not None:
        user.role = payload.role
    if payload.availability is not None:
        user.availability = payload.availability
    if payload.password:
        user.password_hash = hash_password(payload.password)
    if payload.status is not None:
        user.status = payload.status
        if payload.status == UserStatus.INACTIVE:
            delete_user_sessions(db, user.id)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValueError("Email already exists")
    db.refresh(user)
    return user
