"""SQLAlchemy table definitions for NovaScribe.

Only the tables the comment core reads or writes are defined here. They
match the schema created by the Alembic migrations.
"""

from sqlalchemy import (
    Column,
    Enum,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP

# Metadata object for all tables
metadata = MetaData()

comment_status_enum = Enum(
    "PENDING", "APPROVED", "SPAM", "DELETED", name="comment_status", create_type=False
)
post_status_enum = Enum(
    "DRAFT", "PUBLISHED", "ARCHIVED", name="post_status", create_type=False
)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("title", String(300), nullable=False),
    Column("slug", String(200), nullable=False, unique=True),
    Column("status", post_status_enum, nullable=False, server_default="DRAFT"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_posts_status", posts_table.c.status)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", String(36), primary_key=True),
    Column(
        "post_id", String(36), ForeignKey("posts.id", ondelete="CASCADE"), nullable=False
    ),
    # Hard-deleting a top-level comment removes its replies
    Column(
        "parent_id",
        String(36),
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column("author_name", String(100), nullable=False),
    Column("author_email", String(255), nullable=False),
    Column("content", Text, nullable=False),
    Column("ip_address", Text, nullable=True),
    Column("user_agent", Text, nullable=True),
    Column("status", comment_status_enum, nullable=False, server_default="PENDING"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_comments_post_id", comments_table.c.post_id)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_status", comments_table.c.status)
Index("idx_comments_created_at", comments_table.c.created_at)

# ============================================================================
# SITE SETTINGS TABLE
# ============================================================================
site_settings_table = Table(
    "site_settings",
    metadata,
    Column("key", String(100), primary_key=True),
    Column("value", Text, nullable=False),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)
