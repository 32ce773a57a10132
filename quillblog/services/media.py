"""
Featured image upload service.

This module validates uploaded images before handing them to the
configured asset store.
"""

from io import BytesIO

from starlette.datastructures import UploadFile
from PIL import Image

from quillblog.configs.settings import settings
from quillblog.errors.upload import (
    ImageTooLargeError,
    InvalidImageError,
    UnsupportedImageTypeError,
)
from quillblog.services.storage import AssetStore, StoredAsset, get_asset_store


class MediaService:
    """
    Service for featured image uploads.

    Client-side problems (type, size, unreadable image) are raised before
    anything is sent to the store.
    """

    def __init__(self, store: AssetStore | None = None) -> None:
        """
        Initialize the media service.

        Args:
            store: Optional asset store instance. If not provided,
                    the configured asset store will be used.
        """
        self.store = store or get_asset_store()
        self.image_max_size_bytes = settings.MEDIA_IMAGE_MAX_SIZE_MB * 1024 * 1024
        self.image_allowed_types = settings.MEDIA_IMAGE_ALLOWED_TYPES

    def _validate_image_type(self, content_type: str | None) -> None:
        """Validate image content type."""
        if not content_type or content_type not in self.image_allowed_types:
            raise UnsupportedImageTypeError(
                content_type=content_type or "unknown",
                allowed_types=self.image_allowed_types,
            )

    def _validate_image_size(self, file_data: bytes) -> None:
        """Validate image file size."""
        actual_size = len(file_data)
        if actual_size > self.image_max_size_bytes:
            raise ImageTooLargeError(
                max_size_mb=settings.MEDIA_IMAGE_MAX_SIZE_MB,
                actual_size_mb=actual_size / (1024 * 1024),
            )

    def _validate_image_content(self, file_data: bytes) -> None:
        """Validate that the file is a decodable image."""
        if not file_data:
            mssg = "The uploaded image is empty"
            raise InvalidImageError(mssg)
        try:
            with Image.open(BytesIO(file_data)) as img:
                img.verify()
        except Exception as e:
            mssg = f"Invalid or corrupted image file: {e!s}"
            raise InvalidImageError(mssg) from e

    async def read_featured_image(self, file: UploadFile) -> tuple[bytes, str]:
        """
        Read and validate an uploaded featured image.

        Args:
            file: Uploaded file

        Returns:
            tuple[bytes, str]: Image bytes and content type

        Raises:
            UnsupportedImageTypeError: If the MIME type is not allowed
            ImageTooLargeError: If the file exceeds the size limit
            InvalidImageError: If the bytes do not decode as an image
        """
        self._validate_image_type(file.content_type)
        file_data = await file.read()
        self._validate_image_size(file_data)
        self._validate_image_content(file_data)
        return file_data, file.content_type or "image/jpeg"

    async def upload_featured_image(self, file: UploadFile) -> StoredAsset:
        """
        Validate and upload a featured image.

        Args:
            file: Uploaded file

        Returns:
            StoredAsset: URL and asset id of the stored image

        Raises:
            AssetUploadError: If the store fails
        """
        file_data, content_type = await self.read_featured_image(file)
        return await self.store.upload(file_data, content_type)

    async def delete_asset(self, asset_id: str) -> bool:
        """
        Delete a stored asset.

        Args:
            asset_id: Store asset identifier

        Returns:
            bool: True if the asset was removed
        """
        return await self.store.delete(asset_id)
