"""Core tables: users, sessions, appointments, payments.

Revision ID: 5c1d2e3f4a5b
Revises:
Create Date: 2025-11-03
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5c1d2e3f4a5b"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role = sa.Enum("ADMIN", "PRIEST", "CASHIER", name="userrole")
user_status = sa.Enum("ACTIVE", "INACTIVE", name="userstatus")
priest_availability = sa.Enum("AVAILABLE", "DAYOFF", name="priestavailability")
sacrament_type = sa.Enum(
    "BAPTISM",
    "WEDDING",
    "CONFIRMATION",
    "FUNERAL",
    "FIRST_COMMUNION",
    "ANOINTING_OF_SICK",
    "MASS_INTENTION",
    name="sacramenttype",
)
appointment_status = sa.Enum(
    "PENDING", "CONFIRMED", "COMPLETED", "CANCELLED", name="appointmentstatus"
)
payment_method = sa.Enum("CASH", "GCASH", name="paymentmethod")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", user_role, nullable=False),
        sa.Column("status", user_status, nullable=False, server_default="ACTIVE"),
        sa.Column("availability", priest_availability, nullable=False, server_default="AVAILABLE"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_role", "users", ["role"])

    op.create_table(
        "sessions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("token", sa.String(64), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_sessions_id", "sessions", ["id"])
    op.create_index("ix_sessions_token", "sessions", ["token"], unique=True)
    op.create_index("ix_sessions_user_id", "sessions", ["user_id"])

    op.create_table(
        "appointments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("sacrament_type", sacrament_type, nullable=False),
        sa.Column("participant_name", sa.String(200), nullable=False),
        sa.Column("participant_phone", sa.String(50), nullable=True),
        sa.Column("participant_email", sa.String(255), nullable=True),
        sa.Column("barangay", sa.String(120), nullable=True),
        sa.Column("city", sa.String(120), nullable=True),
        sa.Column("province", sa.String(120), nullable=True),
        sa.Column("scheduled_date", sa.Date(), nullable=False),
        sa.Column("scheduled_time", sa.String(20), nullable=False),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("fee", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("status", appointment_status, nullable=False, server_default="PENDING"),
        sa.Column("assigned_priest_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("created_by_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("fee >= 0", name="ck_appointments_fee_non_negative"),
    )
    op.create_index("ix_appointments_id", "appointments", ["id"])
    op.create_index("ix_appointments_sacrament_type", "appointments", ["sacrament_type"])
    op.create_index("ix_appointments_scheduled_date", "appointments", ["scheduled_date"])
    op.create_index("ix_appointments_status", "appointments", ["status"])
    op.create_index("ix_appointments_assigned_priest_id", "appointments", ["assigned_priest_id"])

    op.create_table(
        "payments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("appointment_id", sa.Integer(), sa.ForeignKey("appointments.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("payment_method", payment_method, nullable=False),
        sa.Column("receipt_number", sa.String(20), nullable=False),
        sa.Column("processed_by_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("amount > 0", name="ck_payments_amount_positive"),
    )
    op.create_index("ix_payments_id", "payments", ["id"])
    op.create_index("ix_payments_appointment_id", "payments", ["appointment_id"])
    op.create_index("ix_payments_receipt_number", "payments", ["receipt_number"], unique=True)
    op.create_index("ix_payments_processed_by_id", "payments", ["processed_by_id"])
    op.create_index("ix_payments_created_at", "payments", ["created_at"])


def downgrade() -> None:
    op.drop_table("payments")
    op.drop_table("appointments")
    op.drop_table("sessions")
    op.drop_table("users")

    bind = op.get_bind()
    for enum_type in (
        payment_method,
        appointment_status,
        sacrament_type,
        priest_availability,
        user_status,
        user_role,
    ):
        enum_type.drop(bind, checkfirst=True)
