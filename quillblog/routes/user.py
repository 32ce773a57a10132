# quillblog/routes/user.py

"""
User Routes.

Authors are owned by the external identity provider; this service only keeps
a local row per identity so posts can reference their author.
"""

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response

from quillblog.dependencies import CallerDep, SessionDep, UserRepoDep
from quillblog.errors.blog import UnauthenticatedError, translate_storage_errors
from quillblog.managers.rate_limiter import limiter
from quillblog.monitoring.logging import get_logger
from quillblog.schemas import ApiResponse, UserResponse

router = APIRouter(prefix="/users", tags=["👤 Users"])

logger = get_logger(__name__)


@router.post(
    "/sync",
    response_class=ORJSONResponse,
    response_model=ApiResponse[UserResponse],
    summary="Sync the caller's author record",
    description=(
        "Create the local author record for the caller's identity if it does not "
        "exist yet. Calling it again is a no-op."
    ),
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "message": "User created",
                        "data": {
                            "id": "user_2abc",
                            "email": "ada@example.com",
                            "username": "ada",
                            "createdAt": "2025-01-01T00:00:00Z",
                        },
                        "warnings": [],
                    },
                },
            },
        },
        401: {
            "description": "Missing or invalid identity token",
            "content": {"application/json": {"example": {"detail": "Unauthorized User"}}},
        },
        429: {
            "description": "Rate limit exceeded",
            "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
        },
    },
    operation_id="users_sync",
)
@limiter.limit("10/minute")
async def sync_user(
    request: Request,
    response: Response,
    caller: CallerDep,
    repo: UserRepoDep,
    session: SessionDep,
) -> ApiResponse[UserResponse]:
    """
    Provision the caller's author record.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    caller : CallerIdentity | None
        Caller identity; required.
    repo : UserRepository
        Repository dependency.
    session : AsyncSession
        Database session, committed once the record exists.

    Returns
    -------
    ApiResponse[UserResponse]
        The author record and whether it was just created.
    """
    if caller is None:
        raise UnauthenticatedError

    with translate_storage_errors("sync_user", user_id=caller.user_id):
        user, created = await repo.ensure(caller.user_id, caller.email, caller.username)
        await session.commit()

    if created:
        logger.info("User provisioned", user_id=caller.user_id)
    return ApiResponse(
        message="User created" if created else "User already exists",
        data=UserResponse.model_validate(user, from_attributes=True),
    )
