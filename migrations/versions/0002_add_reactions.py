"""add reactions table

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-16

Emoji reactions on revealed days. Append-only.
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0002"
down_revision = "0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "reactions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("group_id", sa.Integer(), sa.ForeignKey("groups.id", ondelete="CASCADE"), nullable=False),
        sa.Column("day", sa.Date(), nullable=False),
        sa.Column("emoji", sa.String(16), nullable=False),
        sa.Column("posted_by", sa.String(64), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_reactions_group_id", "reactions", ["group_id"])
    op.create_index("ix_reactions_day", "reactions", ["day"])


def downgrade() -> None:
    op.drop_index("ix_reactions_day", table_name="reactions")
    op.drop_index("ix_reactions_group_id", table_name="reactions")
    op.drop_table("reactions")
