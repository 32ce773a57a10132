"""
Blog schemas for the QuillBlog application.

Input models (`BlogCreate`, `BlogUpdate`) carry the field rules of the
validation layer; `BlogRecord` is the full record handed to the repository;
the response models shape what the API returns.
"""

from datetime import datetime
from typing import Any, Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from quillblog.configs.settings import (
    MAX_CATEGORY_NAME_LENGTH,
    MAX_IMAGE_URL_LENGTH,
    MIN_CONTENT_LENGTH,
    MIN_TITLE_LENGTH,
    settings,
)
from quillblog.utils.helpers import slugify_title

DataT = TypeVar("DataT")

_http_url = TypeAdapter(HttpUrl)


def _check_title(value: Any) -> str:
    if not isinstance(value, str):
        mssg = "Title must be a string"
        raise ValueError(mssg)  # noqa: TRY004
    title = value.strip()
    if len(title) < MIN_TITLE_LENGTH:
        mssg = f"Title must be at least {MIN_TITLE_LENGTH} characters long"
        raise ValueError(mssg)
    if len(title) > settings.MAX_TITLE_LENGTH:
        mssg = f"Title must be at most {settings.MAX_TITLE_LENGTH} characters long"
        raise ValueError(mssg)
    if not slugify_title(title):
        mssg = "Title must contain at least one letter or number"
        raise ValueError(mssg)
    return title


def _check_content(value: Any) -> str:
    if not isinstance(value, str):
        mssg = "Content must be a string"
        raise ValueError(mssg)  # noqa: TRY004
    if len(value) < MIN_CONTENT_LENGTH:
        mssg = f"Content must be at least {MIN_CONTENT_LENGTH} characters long"
        raise ValueError(mssg)
    if len(value) > settings.MAX_CONTENT_LENGTH:
        mssg = f"Content must be less than {settings.MAX_CONTENT_LENGTH} characters long"
        raise ValueError(mssg)
    return value


def _check_status(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    mssg = "Status must be a boolean"
    raise ValueError(mssg)


def _check_image_url(value: Any) -> str:
    try:
        url = str(_http_url.validate_python(value))
    except PydanticValidationError as e:
        mssg = "Invalid Image URL"
        raise ValueError(mssg) from e
    if len(url) > MAX_IMAGE_URL_LENGTH:
        mssg = f"Image URL must be at most {MAX_IMAGE_URL_LENGTH} characters long"
        raise ValueError(mssg)
    return url


def _check_category_name(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        mssg = "Category name cannot be empty"
        raise ValueError(mssg)
    name = value.strip()
    if len(name) > MAX_CATEGORY_NAME_LENGTH:
        mssg = f"Category name must be at most {MAX_CATEGORY_NAME_LENGTH} characters long"
        raise ValueError(mssg)
    return name


class BlogCreate(BaseModel):
    """Validated payload for creating a post."""

    title: str
    content: str
    status: bool = False
    featured_image: str | None = None
    category_name: str

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, v: Any) -> str:
        """Trim the title and check its length."""
        return _check_title(v)

    @field_validator("content", mode="before")
    @classmethod
    def validate_content(cls, v: Any) -> str:
        """Check content length bounds."""
        return _check_content(v)

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, v: Any) -> bool:
        """Normalize form-encoded booleans."""
        return _check_status(v)

    @field_validator("featured_image", mode="before")
    @classmethod
    def validate_image(cls, v: Any) -> str | None:
        """Require a well-formed URL when an image string is given."""
        return None if v is None else _check_image_url(v)

    @field_validator("category_name", mode="before")
    @classmethod
    def validate_category(cls, v: Any) -> str:
        """Require a non-empty category name."""
        return _check_category_name(v)


class BlogUpdate(BaseModel):
    """Validated partial payload for updating a post (every field optional)."""

    title: str | None = None
    content: str | None = None
    status: bool | None = None
    featured_image: str | None = None
    category_name: str | None = None

    @field_validator("title", mode="before")
    @classmethod
    def validate_title_if_provided(cls, v: Any) -> str | None:
        """Validate title if provided."""
        return None if v is None else _check_title(v)

    @field_validator("content", mode="before")
    @classmethod
    def validate_content_if_provided(cls, v: Any) -> str | None:
        """Validate content if provided."""
        return None if v is None else _check_content(v)

    @field_validator("status", mode="before")
    @classmethod
    def validate_status_if_provided(cls, v: Any) -> bool | None:
        """Validate status if provided."""
        return None if v is None else _check_status(v)

    @field_validator("featured_image", mode="before")
    @classmethod
    def validate_image_if_provided(cls, v: Any) -> str | None:
        """Validate image URL if provided."""
        return None if v is None else _check_image_url(v)

    @field_validator("category_name", mode="before")
    @classmethod
    def validate_category_if_provided(cls, v: Any) -> str | None:
        """Validate category name if provided."""
        return None if v is None else _check_category_name(v)


class BlogRecord(BaseModel):
    """Full set of writable post fields, as persisted by the repository."""

    title: str
    content: str
    status: bool
    category_id: UUID
    featured_image: str | None = None
    image_id: str | None = None


class BlogFilters(BaseModel):
    """Filters for post listings."""

    status: bool | None = None
    author_id: str | None = None
    category: str | None = None
    limit: int = Field(default=20, ge=1)


class CategoryResponse(BaseModel):
    """Category as returned by the API."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    name: str
    display_name: str = Field(alias="displayName")


class AuthorResponse(BaseModel):
    """Author information for blog responses (without sensitive data)."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str
    username: str | None = None


class BlogResponse(BaseModel):
    """Blog response model with its category and author."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    slug: str
    title: str
    content: str
    status: bool
    featured_image: str | None = Field(default=None, alias="featuredImage")
    image_id: str | None = Field(default=None, alias="imageId")
    author_id: str = Field(alias="authorId")
    category_id: UUID = Field(alias="categoryId")
    category: CategoryResponse | None = None
    author: AuthorResponse | None = None
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class ApiResponse(BaseModel, Generic[DataT]):
    """Success envelope shared by every endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = "Request Successful"
    data: DataT
    warnings: list[str] = Field(default_factory=list)
