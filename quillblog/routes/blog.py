# quillblog/routes/blog.py

"""
Blog Routes.

Provides the post lifecycle endpoints: listing, reading by slug, and the
authenticated create / update / delete operations.

Summary
-------
Endpoints include:
  - List blogs (with filters)
  - List the caller's own blogs
  - Get blog by slug
  - Create blog
  - Update blog
  - Delete blog

Request bodies
--------------
Create and update accept `multipart/form-data` (with an optional
`featuredImage` file) or a JSON object with the same field names.

Rate Limiting
-------------
Every endpoint defines an explicit limit and documents its `429` response.
"""

from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse
from starlette.datastructures import UploadFile
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED

from quillblog.dependencies import BlogFiltersDep, BlogServiceDep, CallerDep
from quillblog.errors.blog import ValidationError
from quillblog.managers.rate_limiter import limiter
from quillblog.models import BlogDB
from quillblog.schemas import ApiResponse, BlogResponse

router = APIRouter(prefix="/blogs", tags=["📝 Blogs"])

BLOG_EXAMPLE = {
    "id": "123e4567-e89b-12d3-a456-426614174000",
    "slug": "hello-world",
    "title": "Hello World",
    "content": "<p>First post on the new blog.</p>",
    "status": True,
    "featuredImage": "https://res.cloudinary.com/demo/image/upload/blogs/abc.jpg",
    "imageId": "blogs/abc",
    "authorId": "user_2abc",
    "categoryId": "123e4567-e89b-12d3-a456-426614174111",
    "category": {
        "id": "123e4567-e89b-12d3-a456-426614174111",
        "name": "tech",
        "displayName": "TECH",
    },
    "author": {"id": "user_2abc", "username": "ada"},
    "createdAt": "2025-01-01T00:00:00Z",
    "updatedAt": "2025-01-01T00:00:00Z",
}

RATE_LIMITED = {
    "description": "Rate limit exceeded",
    "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
}
UNAUTHORIZED = {
    "description": "Missing or invalid identity token",
    "content": {"application/json": {"example": {"detail": "Unauthorized User"}}},
}
NOT_FOUND = {
    "description": "Not found",
    "content": {"application/json": {"example": {"detail": "Post Not Found"}}},
}
FORBIDDEN = {
    "description": "Caller does not own the post",
    "content": {"application/json": {"example": {"detail": "Forbidden"}}},
}
BAD_REQUEST = {
    "description": "Invalid payload",
    "content": {
        "application/json": {
            "example": {"detail": "Title must be at least 3 characters long", "field": "title"},
        },
    },
}
CONFLICT = {
    "description": "Slug already taken",
    "content": {
        "application/json": {"example": {"detail": "A post with this title already exists"}},
    },
}


def to_response(db_blog: BlogDB) -> BlogResponse:
    return BlogResponse.model_validate(db_blog, from_attributes=True)


async def read_payload(request: Request) -> tuple[dict[str, Any], UploadFile | None]:
    """
    Split a create/update body into scalar fields and the featured image file.

    Parameters
    ----------
    request : Request
        Current request context.

    Returns
    -------
    tuple[dict[str, Any], UploadFile | None]
        Raw field values and the uploaded image, if one was attached.
    """
    if request.headers.get("content-type", "").startswith("application/json"):
        try:
            body = await request.json()
        except ValueError as e:
            raise ValidationError("Request body is not valid JSON") from e
        return (body if isinstance(body, dict) else {}), None

    form = await request.form()
    raw: dict[str, Any] = {}
    image: UploadFile | None = None
    for key, value in form.multi_items():
        if isinstance(value, UploadFile):
            # Browsers send an empty part when no file was picked
            if key == "featuredImage" and value.filename:
                image = value
            continue
        raw[key] = value
    return raw, image


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=ApiResponse[list[BlogResponse]],
    summary="List blogs",
    description="List posts, most recently updated first. At most 20 posts are returned.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "message": "Blogs retrieved",
                        "data": [BLOG_EXAMPLE],
                        "warnings": [],
                    },
                },
            },
        },
        429: RATE_LIMITED,
    },
    operation_id="blogs_list",
)
@limiter.limit("60/minute")
async def list_blogs(
    request: Request,
    response: Response,
    filters: BlogFiltersDep,
    service: BlogServiceDep,
    caller: CallerDep,
) -> ApiResponse[list[BlogResponse]]:
    """
    List blogs with optional filters.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    filters : BlogFilters
        Status, author, category and page size.
    service : BlogService
        Lifecycle service dependency.
    caller : CallerIdentity | None
        Caller identity, if any.

    Returns
    -------
    ApiResponse[list[BlogResponse]]
        Matching posts.
    """
    posts = await service.list_posts(filters, caller)
    return ApiResponse(message="Blogs retrieved", data=[to_response(p) for p in posts])


@router.get(
    "/mine",
    response_class=ORJSONResponse,
    response_model=ApiResponse[list[BlogResponse]],
    summary="List my blogs",
    description="List the caller's own posts, drafts included.",
    responses={401: UNAUTHORIZED, 429: RATE_LIMITED},
    operation_id="blogs_list_mine",
)
@limiter.limit("60/minute")
async def list_my_blogs(
    request: Request,
    response: Response,
    filters: BlogFiltersDep,
    service: BlogServiceDep,
    caller: CallerDep,
) -> ApiResponse[list[BlogResponse]]:
    posts = await service.list_mine(caller, filters)
    return ApiResponse(message="Blogs retrieved", data=[to_response(p) for p in posts])


@router.get(
    "/{slug}",
    response_class=ORJSONResponse,
    response_model=ApiResponse[BlogResponse],
    summary="Get blog by slug",
    description="Retrieve a post with its category and author.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "message": "Blog retrieved",
                        "data": BLOG_EXAMPLE,
                        "warnings": [],
                    },
                },
            },
        },
        404: NOT_FOUND,
        429: RATE_LIMITED,
    },
    operation_id="blogs_get_by_slug",
)
@limiter.limit("60/minute")
async def get_blog(
    request: Request,
    response: Response,
    slug: str,
    service: BlogServiceDep,
    caller: CallerDep,
) -> ApiResponse[BlogResponse]:
    """
    Get blog by slug.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    slug : str
        Blog slug.
    service : BlogService
        Lifecycle service dependency.
    caller : CallerIdentity | None
        Caller identity, if any.

    Returns
    -------
    ApiResponse[BlogResponse]
        Blog data.
    """
    post = await service.get_post(slug, caller)
    return ApiResponse(message="Blog retrieved", data=to_response(post))


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=ApiResponse[BlogResponse],
    status_code=HTTP_201_CREATED,
    summary="Create a new blog post",
    description=(
        "Create a post owned by the caller. Fields: `title`, `content`, `status` "
        "(`true` publishes, default draft), `categoryName`, optional `featuredImage` file."
    ),
    responses={
        201: {
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "message": "Blog created",
                        "data": BLOG_EXAMPLE,
                        "warnings": [],
                    },
                },
            },
        },
        400: BAD_REQUEST,
        401: UNAUTHORIZED,
        409: CONFLICT,
        429: RATE_LIMITED,
    },
    operation_id="blogs_create",
)
@limiter.limit("10/minute")
async def create_blog(
    request: Request,
    response: Response,
    service: BlogServiceDep,
    caller: CallerDep,
) -> ApiResponse[BlogResponse]:
    """
    Create a new blog post.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    service : BlogService
        Lifecycle service dependency.
    caller : CallerIdentity | None
        Caller identity; required.

    Returns
    -------
    ApiResponse[BlogResponse]
        Created blog data plus any upload warnings.
    """
    raw, image = await read_payload(request)
    result = await service.create(caller, raw, image)
    return ApiResponse(
        message="Blog created",
        data=to_response(result.post),
        warnings=result.warnings,
    )


@router.put(
    "/{slug}",
    response_class=ORJSONResponse,
    response_model=ApiResponse[BlogResponse],
    summary="Update a blog post",
    description=(
        "Partially update a post owned by the caller. Omitted fields are kept. "
        "`featuredImage` may be a file or an image URL. The slug follows the title."
    ),
    responses={
        400: BAD_REQUEST,
        401: UNAUTHORIZED,
        403: FORBIDDEN,
        404: NOT_FOUND,
        409: CONFLICT,
        429: RATE_LIMITED,
    },
    operation_id="blogs_update",
)
@limiter.limit("20/minute")
async def update_blog(
    request: Request,
    response: Response,
    slug: str,
    service: BlogServiceDep,
    caller: CallerDep,
) -> ApiResponse[BlogResponse]:
    """
    Update a blog post.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    slug : str
        Current blog slug.
    service : BlogService
        Lifecycle service dependency.
    caller : CallerIdentity | None
        Caller identity; must own the post.

    Returns
    -------
    ApiResponse[BlogResponse]
        Updated blog data (possibly under a new slug).
    """
    raw, image = await read_payload(request)
    result = await service.update(caller, slug, raw, image)
    return ApiResponse(
        message="Blog updated",
        data=to_response(result.post),
        warnings=result.warnings,
    )


@router.delete(
    "/{slug}",
    response_class=ORJSONResponse,
    response_model=ApiResponse[bool],
    summary="Delete a blog post",
    description="Permanently delete a post owned by the caller.",
    responses={401: UNAUTHORIZED, 403: FORBIDDEN, 404: NOT_FOUND, 429: RATE_LIMITED},
    operation_id="blogs_delete",
)
@limiter.limit("20/minute")
async def delete_blog(
    request: Request,
    response: Response,
    slug: str,
    service: BlogServiceDep,
    caller: CallerDep,
) -> ApiResponse[bool]:
    deleted = await service.delete(caller, slug)
    return ApiResponse(message="Blog deleted", data=deleted)
