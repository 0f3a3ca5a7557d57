"""create schedule settings

Revision ID: 20261019_02
Revises: 20261019_01
Create Date: 2026-10-19 09:10:00
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20261019_02"
down_revision: Union[str, None] = "20261019_01"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "schedule_settings",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("working_hours_start", sa.String(length=5), nullable=False),
        sa.Column("working_hours_end", sa.String(length=5), nullable=False),
        sa.Column("meeting_duration", sa.Integer(), nullable=False, server_default="30"),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("schedule_settings")
