"""Author database model using SQLModel."""

from datetime import UTC, datetime
from typing import cast

from pydantic import ConfigDict
from sqlalchemy import DateTime
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String


class UserDB(SQLModel, table=True):
    """
    Author database model.

    Rows are keyed by the identity issued by the external identity provider
    and are provisioned idempotently the first time an identity is seen.
    """

    __tablename__ = cast("declared_attr[str]", "users")

    # Primary key (identity provider subject)
    id: str = Field(
        sa_column=Column(String(255), primary_key=True, nullable=False),
        description="Caller identity",
    )

    # Optional profile fields captured at first sight
    email: str | None = Field(
        default=None,
        sa_column=Column(String(255)),
        description="Email address",
    )
    username: str | None = Field(
        default=None,
        sa_column=Column(String(100)),
        description="Username",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Provisioning timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "user_2abcDEF",
                "email": "writer@example.com",
                "username": "writer",
            },
        },
    )
