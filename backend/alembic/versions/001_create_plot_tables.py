"""Create blocks, customers and plots tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Initial schema for the plot registry.
How:   Generic UUID and TIMESTAMP WITH TIME ZONE columns; plot_number
       carries a unique index; plot → block/customer references have no
       foreign keys (existence is checked by the service).

Rollback: downgrade() drops all three tables (destructive — all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the tables and indexes mirrored by app/models/."""
    op.create_table(
        "blocks",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column(
            "name",
            sa.String(100),
            nullable=False,
            comment="Display name of the block, e.g. 'Block A'",
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "customers",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("phone", sa.String(30), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "plots",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column(
            "block_id",
            sa.Uuid(as_uuid=True),
            nullable=False,
            comment="Block this plot belongs to",
        ),
        sa.Column(
            "customer_id",
            sa.Uuid(as_uuid=True),
            nullable=True,
            comment="Customer the plot is assigned to, if any",
        ),
        sa.Column("plot_number", sa.String(50), nullable=False),
        sa.Column("plot_type", sa.String(20), nullable=False, comment="shop or house"),
        sa.Column("area_unit", sa.String(20), nullable=False, comment="kanal or marla"),
        sa.Column("area", sa.Float(), nullable=False),
        sa.Column(
            "category",
            sa.String(20),
            nullable=False,
            comment="commercial or residential",
        ),
        sa.Column("is_cornered", sa.Boolean(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # The unique index is what keeps plot numbers unique under concurrent writes
    op.create_index("uq_plots_plot_number", "plots", ["plot_number"], unique=True)
    op.create_index("idx_plots_block_id", "plots", ["block_id"])
    op.create_index("idx_plots_created_at", "plots", ["created_at"])


def downgrade() -> None:
    """Drop all plot registry tables."""
    op.drop_index("idx_plots_created_at", table_name="plots")
    op.drop_index("idx_plots_block_id", table_name="plots")
    op.drop_index("uq_plots_plot_number", table_name="plots")
    op.drop_table("plots")
    op.drop_table("customers")
    op.drop_table("blocks")
