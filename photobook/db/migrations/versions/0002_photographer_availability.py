"""Add photographer day availability

Revision ID: 0002_photographer_availability
Revises: 0001_initial
Create Date: 2024-05-20
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0002_photographer_availability"
down_revision = "0001_initial"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "photographer_availability",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "photographer_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("event_date", sa.Date(), nullable=False),
        sa.Column("is_available", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("photographer_id", "event_date", name="uq_availability_photographer_day"),
    )
    op.create_index(
        "ix_photographer_availability_photographer_id",
        "photographer_availability",
        ["photographer_id"],
    )


def downgrade() -> None:
    op.drop_index(
        "ix_photographer_availability_photographer_id", table_name="photographer_availability"
    )
    op.drop_table("photographer_availability")
