from quillblog.schemas.blog import (
    ApiResponse,
    AuthorResponse,
    BlogCreate,
    BlogFilters,
    BlogRecord,
    BlogResponse,
    BlogUpdate,
    CategoryResponse,
)
from quillblog.schemas.user import CallerIdentity, UserResponse

__all__ = [
    "ApiResponse",
    "AuthorResponse",
    "BlogCreate",
    "BlogFilters",
    "BlogRecord",
    "BlogResponse",
    "BlogUpdate",
    "CallerIdentity",
    "CategoryResponse",
    "UserResponse",
]
