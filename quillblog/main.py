# quillblog/main.py

"""QuillBlog Backend - blog publishing API with FastAPI and SQLModel."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded
from starlette.status import HTTP_200_OK, HTTP_503_SERVICE_UNAVAILABLE
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from quillblog.configs import settings
from quillblog.dependencies import SessionDep
from quillblog.errors import (
    BlogError,
    DatabaseError,
    UploadError,
    blog_exception_handler,
    database_exception_handler,
    upload_exception_handler,
    validation_exception_handler,
)
from quillblog.managers import limiter, rate_limit_exceeded_handler
from quillblog.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from quillblog.monitoring import CheckStatus, check_database
from quillblog.routes import blog_router, category_router, user_router
from quillblog.utils.helpers import today_str

app = FastAPI(
    title=settings.APP_NAME,
    description="QuillBlog Backend API",
    version="1.0.0",
    lifespan=lifespan,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)
# Trust forwarding headers from the hosting proxy
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

routes = [
    blog_router,
    category_router,
    user_router,
]

_ = [app.include_router(router) for router in routes]

errors = [
    (RateLimitExceeded, rate_limit_exceeded_handler),
    (BlogError, blog_exception_handler),
    (UploadError, upload_exception_handler),
    (DatabaseError, database_exception_handler),
    (RequestValidationError, validation_exception_handler),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]

app.state.limiter = limiter

if settings.STORAGE_PROVIDER == "local":
    settings.UPLOADS_DIR.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=settings.UPLOADS_DIR), name="uploads")


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "version": "1.0.0",
                        "status": "ok",
                        "timestamp": "2025-01-01 12:00:00",
                        "checks": {"database": {"status": "pass", "response_ms": 3}},
                    },
                },
            },
        },
        503: {"description": "Database unreachable"},
    },
    operation_id="health_check",
)
@limiter.exempt
async def health_check(request: Request, session: SessionDep) -> ORJSONResponse:
    """
    Health check endpoint with a database round trip.

    Parameters
    ----------
    request : Request
        Current request context.
    session : AsyncSession
        Database session.

    Returns
    -------
    ORJSONResponse
        Overall status and per-component checks; 503 when the database fails.
    """
    database = await check_database(session)
    healthy = database.status is CheckStatus.PASS

    return ORJSONResponse(
        content={
            "version": app.version,
            "status": "ok" if healthy else "degraded",
            "timestamp": today_str(),
            "checks": {"database": database.to_dict()},
        },
        status_code=HTTP_200_OK if healthy else HTTP_503_SERVICE_UNAVAILABLE,
    )

