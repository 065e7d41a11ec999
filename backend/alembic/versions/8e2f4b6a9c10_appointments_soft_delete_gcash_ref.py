"""Soft delete for appointments; GCash reference on payments.

- appointments.deleted_at replaces hard deletes
- payments.gcash_ref_number (nullable)

Revision ID: 8e2f4b6a9c10
Revises: 5c1d2e3f4a5b
Create Date: 2025-12-01
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "8e2f4b6a9c10"
down_revision: Union[str, Sequence[str], None] = "5c1d2e3f4a5b"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    with op.batch_alter_table("appointments") as batch:
        batch.add_column(sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True))
    with op.batch_alter_table("payments") as batch:
        batch.add_column(sa.Column("gcash_ref_number", sa.String(100), nullable=True))


def downgrade() -> None:
    with op.batch_alter_table("payments") as batch:
        batch.drop_column("gcash_ref_number")
    with op.batch_alter_table("appointments") as batch:
        batch.drop_column("deleted_at")
