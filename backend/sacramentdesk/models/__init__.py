# backend/sacramentdesk/models/__init__.py
"""
Central model registry.

Import this once at startup so SQLAlchemy sees all mapped classes before
relationships are resolved.
"""
from sacramentdesk.db import Base  # re-export Base

from .user import PriestAvailability, User, UserRole, UserSession, UserStatus  # noqa: F401
from .appointment import Appointment, AppointmentStatus, SacramentType  # noqa: F401
from .payment import Payment, PaymentMethod  # noqa: F401
