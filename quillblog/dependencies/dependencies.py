# quillblog/dependencies/dependencies.py

"""Application dependencies: session, caller identity and services."""

from typing import Annotated

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from quillblog.db import get_session
from quillblog.managers.token_manager import decode_identity_token
from quillblog.monitoring.logging import bind_caller
from quillblog.repositories import UserRepository
from quillblog.schemas.blog import BlogFilters
from quillblog.schemas.user import CallerIdentity
from quillblog.services import BlogService, CategoryRegistry, MediaService

bearer_scheme = HTTPBearer(auto_error=False)

SessionDep = Annotated[AsyncSession, Depends(get_session)]


async def get_caller(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> CallerIdentity | None:
    """
    Resolve the caller identity from the bearer token.

    Anonymous requests are not rejected here: missing or invalid tokens yield
    None and each operation decides whether an identity is required.

    Parameters
    ----------
    credentials : HTTPAuthorizationCredentials | None
        Bearer credentials, if the request carried any.

    Returns
    -------
    CallerIdentity | None
        Verified caller, or None.
    """
    if credentials is None:
        return None
    caller = decode_identity_token(credentials.credentials)
    if caller is not None:
        bind_caller(caller.user_id)
    return caller


CallerDep = Annotated[CallerIdentity | None, Depends(get_caller)]


def get_media_service() -> MediaService:
    return MediaService()


MediaDep = Annotated[MediaService, Depends(get_media_service)]


def get_blog_service(session: SessionDep, media: MediaDep) -> BlogService:
    """
    Resolve the `BlogService` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.
    media : MediaService
        Featured image service.

    Returns
    -------
    BlogService
        Service bound to the session.
    """
    return BlogService(session, media=media)


BlogServiceDep = Annotated[BlogService, Depends(get_blog_service)]


def get_category_registry(session: SessionDep) -> CategoryRegistry:
    return CategoryRegistry(session)


CategoryRegistryDep = Annotated[CategoryRegistry, Depends(get_category_registry)]


def get_user_repository(session: SessionDep) -> UserRepository:
    return UserRepository(session)


UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]


def get_blog_filters(
    status: Annotated[bool | None, Query(description="Filter by published (true) or draft (false)")] = None,
    author_id: Annotated[str | None, Query(description="Optional author ID filter")] = None,
    category: Annotated[str | None, Query(description="Optional category name filter")] = None,
    limit: Annotated[
        int,
        Query(ge=1, description="Maximum number of posts to return (capped at 20)"),
    ] = 20,
) -> BlogFilters:
    """
    Dependency to construct `BlogFilters` from query parameters.

    Returns
    -------
    BlogFilters
        Aggregated query parameters object.
    """
    return BlogFilters(status=status, author_id=author_id, category=category, limit=limit)


BlogFiltersDep = Annotated[BlogFilters, Depends(get_blog_filters)]
