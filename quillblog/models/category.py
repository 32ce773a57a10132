"""Category database model using SQLModel."""

from datetime import UTC, datetime
from typing import cast
from uuid import UUID, uuid4

from sqlalchemy import DateTime
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String


class CategoryDB(SQLModel, table=True):
    """
    Category database model.

    `name` is the canonical key (trimmed, lower-cased) and carries the unique
    constraint that category resolution relies on. `display_name` is derived
    from it once, at creation.
    """

    __tablename__ = cast("declared_attr[str]", "categories")

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Category ID",
    )
    name: str = Field(
        sa_column=Column(String(100), unique=True, nullable=False, index=True),
        description="Normalized category key (unique)",
    )
    display_name: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Human readable label",
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Creation timestamp",
    )
