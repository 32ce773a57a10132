"""
Post payload validation.

Pure functions turning raw form or JSON input into validated `BlogCreate` /
`BlogUpdate` models. Failures surface as a single `ValidationError` carrying
the first offending message and its field.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from quillblog.errors.blog import ValidationError
from quillblog.schemas.blog import BlogCreate, BlogUpdate

# Wire names accepted from clients, mapped to model fields
FIELD_ALIASES = {
    "categoryName": "category_name",
    "category": "category_name",
    "featuredImage": "featured_image",
}

FIELD_LABELS = {
    "title": "Title",
    "content": "Content",
    "status": "Status",
    "featured_image": "Featured image",
    "category_name": "Category name",
}


def _normalize(raw: Mapping[str, Any], *, partial: bool) -> dict[str, Any]:
    data: dict[str, Any] = {}
    for key, value in raw.items():
        field = FIELD_ALIASES.get(key, key)
        if field not in FIELD_LABELS or value is None:
            continue
        # An empty image string on update means "no image change"
        if partial and field == "featured_image" and isinstance(value, str) and not value.strip():
            continue
        # `categoryName` wins over the legacy `category` key
        if field == "category_name" and key == "category" and "category_name" in data:
            continue
        data[field] = value
    return data


def _first_error(exc: PydanticValidationError) -> ValidationError:
    error = exc.errors()[0]
    field = str(error["loc"][0]) if error["loc"] else None
    label = FIELD_LABELS.get(field or "", "Field")

    match error["type"]:
        case "value_error":
            message = str(error.get("ctx", {}).get("error", error["msg"]))
        case "missing":
            message = f"{label} is required"
        case _:
            message = f"{label}: {error['msg']}"

    return ValidationError(detail=message, field=field)


def validate_create(raw: Mapping[str, Any]) -> BlogCreate:
    """
    Validate a create payload.

    Args:
        raw: Client input (form fields or JSON)

    Returns:
        BlogCreate: Validated payload; `status` defaults to draft

    Raises:
        ValidationError: On the first rule violation
    """
    try:
        return BlogCreate.model_validate(_normalize(raw, partial=False))
    except PydanticValidationError as e:
        raise _first_error(e) from e


def validate_update(raw: Mapping[str, Any]) -> BlogUpdate:
    """
    Validate a partial update payload; only provided fields are checked.

    Raises:
        ValidationError: On the first rule violation
    """
    try:
        return BlogUpdate.model_validate(_normalize(raw, partial=True))
    except PydanticValidationError as e:
        raise _first_error(e) from e
