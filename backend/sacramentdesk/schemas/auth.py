# backend/sacramentdesk/schemas/auth.py
from __future__ import annotations

from pydantic import BaseModel, Field

from sacramentdesk.schemas.user import UserRead


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    message: str
    user: UserRead


class SessionResponse(BaseModel):
    user: UserRead


class MessageResponse(BaseModel):
    message: str
