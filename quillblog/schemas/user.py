"""Caller identity and author schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CallerIdentity(BaseModel):
    """Verified caller identity supplied by the identity provider."""

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(min_length=1)
    email: str | None = None
    username: str | None = None


class UserResponse(BaseModel):
    """Provisioned author as returned by the API."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str
    email: str | None = None
    username: str | None = None
    created_at: datetime = Field(alias="createdAt")
