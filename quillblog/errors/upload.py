"""
Upload-related error classes.

This module defines custom exceptions for featured image uploads,
covering image validation and asset store failures.
"""

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_413_REQUEST_ENTITY_TOO_LARGE,
    HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_502_BAD_GATEWAY,
)

from quillblog.errors.base import BaseAppError, create_exception_handler
from quillblog.monitoring.logging import get_logger

logger = get_logger(__name__)


class UploadError(BaseAppError):
    """Base exception for upload-related errors."""

    def __init__(
        self,
        detail: str = "We couldn't upload your file. Please try again.",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail=detail, status_code=status_code)


class ImageTooLargeError(UploadError):
    """Exception raised when uploaded image exceeds size limit."""

    def __init__(
        self,
        max_size_mb: int = 5,
        actual_size_mb: float | None = None,
    ) -> None:
        detail = f"Your image is too large. Please use an image smaller than {max_size_mb}MB."
        if actual_size_mb is not None:
            detail += f" Your file is {actual_size_mb:.1f}MB."
        super().__init__(detail=detail, status_code=HTTP_413_REQUEST_ENTITY_TOO_LARGE)
        self.max_size_mb = max_size_mb
        self.actual_size_mb = actual_size_mb


class UnsupportedImageTypeError(UploadError):
    """Exception raised when uploaded image type is not supported."""

    def __init__(
        self,
        content_type: str,
        allowed_types: list[str] | None = None,
    ) -> None:
        allowed = allowed_types or ["image/jpeg", "image/png", "image/webp"]
        detail = "This image format isn't supported. Please use JPEG, PNG, or WebP images."
        super().__init__(detail=detail, status_code=HTTP_415_UNSUPPORTED_MEDIA_TYPE)
        self.content_type = content_type
        self.allowed_types = allowed


class InvalidImageError(UploadError):
    """Exception raised when uploaded file is not a valid image."""

    def __init__(
        self,
        detail: str = "This file doesn't appear to be a valid image. Please try a different file.",
    ) -> None:
        super().__init__(detail=detail, status_code=HTTP_400_BAD_REQUEST)


class AssetError(UploadError):
    """Base exception for asset store transport failures."""

    def __init__(
        self,
        detail: str = "The image service is unavailable. Please try again later.",
    ) -> None:
        super().__init__(detail=detail, status_code=HTTP_502_BAD_GATEWAY)


class AssetUploadError(AssetError):
    """Exception raised when the asset store rejects or fails an upload."""

    def __init__(self, detail: str = "We couldn't save your image. Please try again later.") -> None:
        super().__init__(detail=detail)


class AssetDeleteError(AssetError):
    """Exception raised when the asset store fails to delete an asset."""

    def __init__(self, asset_id: str, detail: str | None = None) -> None:
        super().__init__(detail=detail or f"Failed to delete asset {asset_id}")
        self.asset_id = asset_id


upload_exception_handler = create_exception_handler(logger)
