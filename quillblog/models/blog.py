"""Blog post database model using SQLModel."""

from datetime import UTC, datetime
from typing import cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import Boolean, DateTime, Index, Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, Relationship, SQLModel, String

from quillblog.models.category import CategoryDB
from quillblog.models.user import UserDB


class BlogDB(SQLModel, table=True):
    """
    Blog post database model.

    `slug` is unique and always derived from the current title. `author_id`
    is written once at creation. `image_id` is only set for images that went
    through the asset store.
    """

    __tablename__ = cast("declared_attr[str]", "blog_posts")

    __table_args__ = (
        Index("ix_blog_posts_status_updated", "status", "updated_at"),
        Index("ix_blog_posts_author_updated", "author_id", "updated_at"),
    )

    # Primary key
    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Blog ID",
    )

    # Foreign keys
    author_id: str = Field(
        sa_column=Column(
            "author_id",
            String(255),
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        description="Author identity (foreign key to users.id)",
    )
    category_id: UUID = Field(
        sa_column=Column(
            "category_id",
            ForeignKey("categories.id"),
            nullable=False,
            index=True,
        ),
        description="Category ID (foreign key to categories.id)",
    )

    # Required fields
    title: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Blog title",
    )
    slug: str = Field(
        sa_column=Column(String(255), unique=True, nullable=False, index=True),
        description="URL-friendly slug (unique)",
    )
    content: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Blog content (opaque rich text)",
    )
    status: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, default=False),
        description="Published (true) or draft (false)",
    )

    # Optional fields
    featured_image: str | None = Field(
        default=None,
        sa_column=Column(String(2048)),
        description="Featured image URL",
    )
    image_id: str | None = Field(
        default=None,
        sa_column=Column(String(255)),
        description="Asset store identifier of the featured image",
    )

    # Timestamps (timezone-aware)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
        description="Creation timestamp",
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
        description="Last update timestamp",
    )

    # Relationships (always loaded explicitly by the repository)
    category: CategoryDB | None = Relationship()
    author: UserDB | None = Relationship()

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "author_id": "user_2abcDEF",
                "category_id": "123e4567-e89b-12d3-a456-426614174000",
                "title": "Hello World",
                "slug": "hello-world",
                "content": "<p>This is a sufficiently long body.</p>",
                "status": True,
                "featured_image": "https://res.cloudinary.com/demo/image/upload/blogs/abc.jpg",
                "image_id": "blogs/abc",
            },
        },
    )
