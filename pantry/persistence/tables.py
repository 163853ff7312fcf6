"""SQLAlchemy table definitions for pantry.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

moderation_status_enum = postgresql.ENUM(
    "pending", "approved", "rejected", name="moderation_status", create_type=False
)

# ============================================================================
# USERS TABLE (identity store projection)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("username", String(50), nullable=False, unique=True),
    Column("email", String(255), nullable=True),
    Column(
        "role",
        postgresql.ENUM("user", "moderator", "admin", "owner", name="user_role", create_type=False),
        nullable=False,
        server_default="user",
    ),
    Column(
        "status",
        postgresql.ENUM("active", "suspended", "blocked", name="account_status", create_type=False),
        nullable=False,
        server_default="active",
    ),
    Column("is_verified", Boolean, nullable=False, server_default="false"),
    Column("is_flagged", Boolean, nullable=False, server_default="false"),
    Column("flag_reason", Text, nullable=True),
    Column(
        "flagged_by", UUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    ),
    Column("flagged_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_users_role", users_table.c.role)
Index(
    "idx_users_flagged_at",
    users_table.c.flagged_at.desc(),
    postgresql_where=users_table.c.is_flagged.is_(True),
)

# ============================================================================
# RECIPES TABLE
# ============================================================================
recipes_table = Table(
    "recipes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("author_username", String(50), nullable=False),  # Denormalized from users
    Column("title", String(255), nullable=False),
    Column("description", Text, nullable=True),
    Column("category", String(50), nullable=False),
    Column("difficulty", String(20), nullable=False),
    Column("prep_time_minutes", Integer, nullable=False, server_default="0"),
    Column("cook_time_minutes", Integer, nullable=False, server_default="0"),
    Column("servings", Integer, nullable=False, server_default="1"),
    Column("image_url", Text, nullable=True),
    Column("ingredients", JSONB, nullable=False, server_default="[]"),
    Column("instructions", JSONB, nullable=False, server_default="[]"),
    Column("tags", JSONB, nullable=False, server_default="[]"),
    # Derived from the ratings table, never written by hand
    Column("rating", Numeric(3, 2), nullable=False, server_default="0.00"),
    Column("review_count", Integer, nullable=False, server_default="0"),
    Column("view_count", Integer, nullable=False, server_default="0"),
    Column("status", moderation_status_enum, nullable=False, server_default="pending"),
    Column("is_published", Boolean, nullable=False, server_default="false"),
    Column("moderation_reason", Text, nullable=True),
    Column(
        "moderated_by", UUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    ),
    Column("moderated_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "is_published = (status = 'approved')", name="published_iff_approved"
    ),
    CheckConstraint("servings >= 1", name="servings_positive"),
)

Index("idx_recipes_status_created_at", recipes_table.c.status, recipes_table.c.created_at)
Index("idx_recipes_author_id", recipes_table.c.author_id)
Index("idx_recipes_is_published", recipes_table.c.is_published)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "recipe_id", UUID, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("author_username", String(50), nullable=False),  # Denormalized from users
    Column("content", Text, nullable=False),
    Column("status", moderation_status_enum, nullable=False, server_default="pending"),
    Column("moderation_reason", Text, nullable=True),
    Column(
        "moderated_by", UUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    ),
    Column("moderated_at", TIMESTAMP(timezone=True), nullable=True),
    Column("is_flagged", Boolean, nullable=False, server_default="false"),
    Column("flag_reason", Text, nullable=True),
    Column(
        "flagged_by", UUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    ),
    Column("flagged_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("char_length(content) BETWEEN 1 AND 5000", name="content_length"),
)

Index("idx_comments_recipe_id", comments_table.c.recipe_id)
Index(
    "idx_comments_status_created_at", comments_table.c.status, comments_table.c.created_at
)
Index(
    "idx_comments_flagged_at",
    comments_table.c.flagged_at.desc(),
    postgresql_where=comments_table.c.is_flagged.is_(True),
)

# ============================================================================
# RATINGS TABLE
# ============================================================================
ratings_table = Table(
    "ratings",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "recipe_id", UUID, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False
    ),
    Column("value", Integer, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("recipe_id", "user_id", name="uq_rating_recipe_user"),
    CheckConstraint("value BETWEEN 1 AND 5", name="rating_value_range"),
)

Index("idx_ratings_recipe_id", ratings_table.c.recipe_id)

# ============================================================================
# AUDIT LOG TABLE (append-only)
# ============================================================================
# No foreign keys: entries outlive the entities they describe.
audit_log_table = Table(
    "audit_log",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("entity_id", UUID, nullable=False),
    Column(
        "entity_type",
        postgresql.ENUM("recipe", "comment", "user", name="audit_entity_type", create_type=False),
        nullable=False,
    ),
    Column("entity_title", Text, nullable=True),
    Column("snapshot", JSONB, nullable=False, server_default="{}"),
    Column("actor_id", UUID, nullable=False),
    Column("actor_username", String(50), nullable=False),
    Column("action", String(20), nullable=False),
    Column("reason", Text, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_audit_log_entity",
    audit_log_table.c.entity_type,
    audit_log_table.c.entity_id,
    audit_log_table.c.created_at,
)
Index("idx_audit_log_actor_id", audit_log_table.c.actor_id)
