"""add flag columns to users

Moderators can flag an account for admin attention without changing its
status.

Revision ID: 9b41e6d2c8f3
Revises: 3c5d9a1e7b42
Create Date: 2026-10-19 15:40:12.904113

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "9b41e6d2c8f3"
down_revision: Union[str, Sequence[str], None] = "3c5d9a1e7b42"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.add_column(
        "users",
        sa.Column(
            "is_flagged", sa.Boolean(), nullable=False, server_default=sa.text("false")
        ),
    )
    op.add_column("users", sa.Column("flag_reason", sa.Text(), nullable=True))
    op.add_column("users", sa.Column("flagged_by", sa.UUID(), nullable=True))
    op.add_column(
        "users", sa.Column("flagged_at", sa.TIMESTAMP(timezone=True), nullable=True)
    )
    op.create_foreign_key(
        "users_flagged_by_fkey",
        "users",
        "users",
        ["flagged_by"],
        ["id"],
        ondelete="SET NULL",
    )

    # Flagged accounts listed newest first
    op.create_index(
        "idx_users_flagged_at",
        "users",
        [sa.text("flagged_at DESC")],
        postgresql_where=sa.text("is_flagged = true"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_users_flagged_at", table_name="users")
    op.drop_constraint("users_flagged_by_fkey", "users", type_="foreignkey")
    op.drop_column("users", "flagged_at")
    op.drop_column("users", "flagged_by")
    op.drop_column("users", "flag_reason")
    op.drop_column("users", "is_flagged")
