"""initial_schema

Create the schema for the recipe moderation engine:
- Users (projection of the identity store: role, account status)
- Recipes (moderation status, publish flag, cached rating aggregate)
- Comments (moderation status plus an independent flag)
- Ratings (one row per user and recipe)
- Audit log (append-only, no foreign keys)

Revision ID: 3c5d9a1e7b42
Revises:
Create Date: 2026-10-19 10:12:44.318207

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c5d9a1e7b42"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _create_enum(name: str, values: Sequence[str]) -> None:
    labels = ", ".join(f"'{value}'" for value in values)
    op.execute(f"""
        DO $$ BEGIN
            CREATE TYPE {name} AS ENUM ({labels});
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    _create_enum("user_role", ["user", "moderator", "admin", "owner"])
    _create_enum("account_status", ["active", "suspended", "blocked"])
    _create_enum("moderation_status", ["pending", "approved", "rejected"])
    _create_enum("audit_entity_type", ["recipe", "comment", "user"])

    moderation_status = postgresql.ENUM(
        "pending", "approved", "rejected", name="moderation_status", create_type=False
    )

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column(
            "role",
            postgresql.ENUM(
                "user", "moderator", "admin", "owner", name="user_role", create_type=False
            ),
            nullable=False,
            server_default="user",
        ),
        sa.Column(
            "status",
            postgresql.ENUM(
                "active", "suspended", "blocked", name="account_status", create_type=False
            ),
            nullable=False,
            server_default="active",
        ),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default="false"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username", name="uq_users_username"),
    )
    op.create_index("idx_users_role", "users", ["role"])

    # ========================================================================
    # RECIPES table
    # ========================================================================
    op.create_table(
        "recipes",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("author_username", sa.String(50), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column("difficulty", sa.String(20), nullable=False),
        sa.Column("prep_time_minutes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("cook_time_minutes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("servings", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column(
            "ingredients",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column(
            "instructions",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column(
            "tags",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column("rating", sa.Numeric(3, 2), nullable=False, server_default="0.00"),
        sa.Column("review_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("view_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "status", moderation_status, nullable=False, server_default="pending"
        ),
        sa.Column("is_published", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("moderation_reason", sa.Text(), nullable=True),
        sa.Column("moderated_by", sa.UUID(), nullable=True),
        sa.Column("moderated_at", sa.TIMESTAMP(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["moderated_by"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        # Published exactly when approved
        sa.CheckConstraint(
            "is_published = (status = 'approved')", name="published_iff_approved"
        ),
        sa.CheckConstraint("servings >= 1", name="servings_positive"),
    )
    op.create_index(
        "idx_recipes_status_created_at", "recipes", ["status", "created_at"]
    )
    op.create_index("idx_recipes_author_id", "recipes", ["author_id"])
    op.create_index("idx_recipes_is_published", "recipes", ["is_published"])

    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("recipe_id", sa.UUID(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("author_username", sa.String(50), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "status", moderation_status, nullable=False, server_default="pending"
        ),
        sa.Column("moderation_reason", sa.Text(), nullable=True),
        sa.Column("moderated_by", sa.UUID(), nullable=True),
        sa.Column("moderated_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("is_flagged", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("flag_reason", sa.Text(), nullable=True),
        sa.Column("flagged_by", sa.UUID(), nullable=True),
        sa.Column("flagged_at", sa.TIMESTAMP(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["recipe_id"], ["recipes.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["moderated_by"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["flagged_by"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "char_length(content) BETWEEN 1 AND 5000", name="content_length"
        ),
    )
    op.create_index("idx_comments_recipe_id", "comments", ["recipe_id"])
    op.create_index(
        "idx_comments_status_created_at", "comments", ["status", "created_at"]
    )
    # Flag queue only ever scans flagged rows
    op.execute("""
        CREATE INDEX idx_comments_flagged_at
        ON comments (flagged_at DESC)
        WHERE is_flagged = true
    """)

    # ========================================================================
    # RATINGS table
    # ========================================================================
    op.create_table(
        "ratings",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("recipe_id", sa.UUID(), nullable=False),
        sa.Column("value", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["recipe_id"], ["recipes.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("recipe_id", "user_id", name="uq_rating_recipe_user"),
        sa.CheckConstraint("value BETWEEN 1 AND 5", name="rating_value_range"),
    )
    op.create_index("idx_ratings_recipe_id", "ratings", ["recipe_id"])

    # ========================================================================
    # AUDIT_LOG table (append-only, outlives the entities it describes)
    # ========================================================================
    op.create_table(
        "audit_log",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("entity_id", sa.UUID(), nullable=False),
        sa.Column(
            "entity_type",
            postgresql.ENUM(
                "recipe", "comment", "user", name="audit_entity_type", create_type=False
            ),
            nullable=False,
        ),
        sa.Column("entity_title", sa.Text(), nullable=True),
        sa.Column(
            "snapshot",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column("actor_id", sa.UUID(), nullable=False),
        sa.Column("actor_username", sa.String(50), nullable=False),
        sa.Column("action", sa.String(20), nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_audit_log_entity",
        "audit_log",
        ["entity_type", "entity_id", "created_at"],
    )
    op.create_index("idx_audit_log_actor_id", "audit_log", ["actor_id"])

    # ========================================================================
    # TRIGGERS
    # ========================================================================
    op.execute("""
        CREATE OR REPLACE FUNCTION update_updated_at_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql
    """)

    for table in ("users", "recipes", "comments", "ratings"):
        op.execute(f"""
            CREATE TRIGGER update_{table}_updated_at
            BEFORE UPDATE ON {table}
            FOR EACH ROW EXECUTE FUNCTION update_updated_at_column()
        """)

    # Audit rows are never edited in place
    op.execute("""
        CREATE OR REPLACE FUNCTION reject_audit_log_update()
        RETURNS TRIGGER AS $$
        BEGIN
            RAISE EXCEPTION 'audit_log is append-only';
        END;
        $$ LANGUAGE plpgsql
    """)
    op.execute("""
        CREATE TRIGGER audit_log_append_only
        BEFORE UPDATE ON audit_log
        FOR EACH ROW EXECUTE FUNCTION reject_audit_log_update()
    """)


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("DROP TRIGGER IF EXISTS audit_log_append_only ON audit_log")
    op.execute("DROP FUNCTION IF EXISTS reject_audit_log_update()")
    for table in ("users", "recipes", "comments", "ratings"):
        op.execute(f"DROP TRIGGER IF EXISTS update_{table}_updated_at ON {table}")
    op.execute("DROP FUNCTION IF EXISTS update_updated_at_column()")

    op.drop_table("audit_log")
    op.drop_table("ratings")
    op.drop_table("comments")
    op.drop_table("recipes")
    op.drop_table("users")

    op.execute("DROP TYPE IF EXISTS audit_entity_type")
    op.execute("DROP TYPE IF EXISTS moderation_status")
    op.execute("DROP TYPE IF EXISTS account_status")
    op.execute("DROP TYPE IF EXISTS user_role")
