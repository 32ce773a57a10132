"""
Initial schema: Create users, categories and blog_posts tables.

Revision ID: 0001
Revises:
Create Date: 2026-10-19

- users: Authors keyed by identity provider subject
- categories: Normalized, unique category names
- blog_posts: Posts with author and category relationships
"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# Revision identifiers, used by Alembic
revision: str = "0001"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Apply schema changes for this revision."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("username", sa.String(length=100), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "categories",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("display_name", sa.String(length=100), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_categories_name", "categories", ["name"], unique=True)

    op.create_table(
        "blog_posts",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("author_id", sa.String(length=255), nullable=False),
        sa.Column("category_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("status", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("featured_image", sa.String(length=2048), nullable=True),
        sa.Column("image_id", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_blog_posts_slug", "blog_posts", ["slug"], unique=True)
    op.create_index("ix_blog_posts_author_id", "blog_posts", ["author_id"], unique=False)
    op.create_index("ix_blog_posts_category_id", "blog_posts", ["category_id"], unique=False)
    op.create_index("ix_blog_posts_created_at", "blog_posts", ["created_at"], unique=False)
    op.create_index("ix_blog_posts_updated_at", "blog_posts", ["updated_at"], unique=False)
    # Composite indexes for listings
    op.create_index(
        "ix_blog_posts_status_updated",
        "blog_posts",
        ["status", "updated_at"],
        unique=False,
    )
    op.create_index(
        "ix_blog_posts_author_updated",
        "blog_posts",
        ["author_id", "updated_at"],
        unique=False,
    )


def downgrade() -> None:
    """Revert schema changes for this revision."""
    op.drop_index("ix_blog_posts_author_updated", table_name="blog_posts")
    op.drop_index("ix_blog_posts_status_updated", table_name="blog_posts")
    op.drop_index("ix_blog_posts_updated_at", table_name="blog_posts")
    op.drop_index("ix_blog_posts_created_at", table_name="blog_posts")
    op.drop_index("ix_blog_posts_category_id", table_name="blog_posts")
    op.drop_index("ix_blog_posts_author_id", table_name="blog_posts")
    op.drop_index("ix_blog_posts_slug", table_name="blog_posts")
    op.drop_table("blog_posts")

    op.drop_index("ix_categories_name", table_name="categories")
    op.drop_table("categories")

    op.drop_table("users")
