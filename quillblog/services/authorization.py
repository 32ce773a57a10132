"""Authorization guard for blog mutations."""

from enum import StrEnum

from quillblog.errors.blog import ForbiddenError, NotFoundError, UnauthenticatedError
from quillblog.models.blog import BlogDB
from quillblog.schemas.user import CallerIdentity


class Action(StrEnum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


def authorize(
    action: Action,
    post: BlogDB | None,
    caller: CallerIdentity | None,
) -> CallerIdentity:
    """
    Check that `caller` may perform `action` on `post`.

    Checks run in a fixed order: identity (401), then existence (404), then
    ownership (403). `create` only needs an identity.

    Returns:
        CallerIdentity: The authorized caller

    Raises:
        UnauthenticatedError: No caller identity
        NotFoundError: Update/delete target does not exist
        ForbiddenError: Caller is not the post's author
    """
    if caller is None:
        raise UnauthenticatedError
    if action is Action.CREATE:
        return caller
    if post is None:
        raise NotFoundError
    if post.author_id != caller.user_id:
        raise ForbiddenError
    return caller
