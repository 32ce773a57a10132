# quillblog/dependencies/__init__.py

from quillblog.dependencies.dependencies import (
    BlogFiltersDep,
    BlogServiceDep,
    CallerDep,
    CategoryRegistryDep,
    MediaDep,
    SessionDep,
    UserRepoDep,
    get_blog_service,
    get_caller,
    get_media_service,
)

__all__ = [
    "BlogFiltersDep",
    "BlogServiceDep",
    "CallerDep",
    "CategoryRegistryDep",
    "MediaDep",
    "SessionDep",
    "UserRepoDep",
    "get_blog_service",
    "get_caller",
    "get_media_service",
]
