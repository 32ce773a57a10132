# quillblog/managers/rate_limiter.py

"""Rate limiter configuration using slowapi."""

from typing import cast

from fastapi import Request
from fastapi.responses import ORJSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.status import HTTP_429_TOO_MANY_REQUESTS

from quillblog.configs import LimiterConfig
from quillblog.monitoring.logging import get_logger
from quillblog.utils.helpers import host

logger = get_logger(__name__)


def get_identifier(request: Request) -> str:
    """
    Get unique identifier for rate limiting.

    Authenticated requests are keyed by their bearer token so that writers
    behind one address do not share a limit; others fall back to the IP.

    Args:
        request: FastAPI request object.

    Returns:
        Unique identifier string.
    """
    scheme, _, token = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() == "bearer" and token:
        return f"token:{token[-32:]}"

    return f"ip:{get_remote_address(request)}"


limiter = Limiter(**LimiterConfig().model_dump(), key_func=get_identifier)


async def rate_limit_exceeded_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle rate limit exceeded exceptions.

    Args:
        request: FastAPI request object.
        exc: RateLimitExceeded exception.

    Returns:
        JSON response with error details.
    """
    http_exc = cast(RateLimitExceeded, exc)
    response = _rate_limit_exceeded_handler(request, http_exc)
    logger.warning("Rate limit exceeded", ip=host(request), path=request.url.path)
    return ORJSONResponse(
        status_code=HTTP_429_TOO_MANY_REQUESTS,
        content={
            "detail": "Rate limit exceeded",
            "allowed_requests": http_exc.detail,
            "retry_after": f"{response.headers.get('retry-after', '60')} seconds",
        },
    )
