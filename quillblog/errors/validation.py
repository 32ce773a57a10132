"""Rendering of FastAPI request-shape errors (query and path parameters)."""

from typing import Any, cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_422_UNPROCESSABLE_CONTENT

from quillblog.monitoring.logging import get_logger
from quillblog.utils.helpers import host

logger = get_logger(__name__)


def _describe(error: dict[str, Any]) -> dict[str, Any]:
    # loc[0] is the source ("query", "path", "body"); the rest names the field
    source, *path = error.get("loc", ()) or ("request",)
    described: dict[str, Any] = {
        "field": ".".join(str(part) for part in path) or str(source),
        "source": str(source),
        "message": error.get("msg", "Invalid value"),
    }
    if ctx := error.get("ctx"):
        described["context"] = {
            key: str(value) if isinstance(value, Exception) else value for key, value in ctx.items()
        }
    return described


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Render a `RequestValidationError` as a flat list of field problems.

    Post bodies are validated by the blog service and answer 400; this
    handler covers the parameters FastAPI checks itself (e.g. `limit`).
    """
    errors = [_describe(error) for error in cast(RequestValidationError, exc).errors()]

    logger.warning(
        "Request validation failed",
        ip=host(request),
        path=request.url.path,
        errors=errors,
    )

    return ORJSONResponse(
        status_code=HTTP_422_UNPROCESSABLE_CONTENT,
        content={"detail": "Validation failed", "errors": errors},
    )
