# quillblog/routes/category.py

"""Category Routes."""

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response

from quillblog.dependencies import CategoryRegistryDep
from quillblog.managers.rate_limiter import limiter
from quillblog.schemas import ApiResponse, CategoryResponse

router = APIRouter(prefix="/categories", tags=["🏷️ Categories"])


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=ApiResponse[list[CategoryResponse]],
    summary="List categories",
    description="List every category, ordered by name.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "message": "Categories retrieved",
                        "data": [
                            {
                                "id": "123e4567-e89b-12d3-a456-426614174111",
                                "name": "tech",
                                "displayName": "TECH",
                            },
                        ],
                        "warnings": [],
                    },
                },
            },
        },
        429: {
            "description": "Rate limit exceeded",
            "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
        },
    },
    operation_id="categories_list",
)
@limiter.limit("60/minute")
async def list_categories(
    request: Request,
    response: Response,
    registry: CategoryRegistryDep,
) -> ApiResponse[list[CategoryResponse]]:
    categories = await registry.list_all()
    return ApiResponse(
        message="Categories retrieved",
        data=[CategoryResponse.model_validate(c, from_attributes=True) for c in categories],
    )
