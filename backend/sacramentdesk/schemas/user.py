# backend/sacramentdesk/schemas/user.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from sacramentdesk.models.user import PriestAvailability, UserRole, UserStatus


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    email: str = Field(..., min_length=3, max_length=255)  # allow dev domains like .local
    password: str = Field(..., min_length=1)
    role: UserRole
    status: UserStatus = UserStatus.ACTIVE
    availability: PriestAvailability = PriestAvailability.AVAILABLE


class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    email: Optional[str] = Field(None, min_length=3, max_length=255)
    password: Optional[str] = None  # blank means "keep current"
    role: Optional[UserRole] = None
    status: Optional[UserStatus] = None
    availability: Optional[PriestAvailability] = None


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    role: UserRole
    status: UserStatus
    availability: PriestAvailability
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # Pydantic v2: allows ORM objects to be returned directly
    model_config = ConfigDict(from_attributes=True)


class UserBrief(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class UserContact(BaseModel):
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)
