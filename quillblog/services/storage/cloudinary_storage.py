"""
Cloudinary asset store.

Production backend: images are delivered from Cloudinary's CDN and
optimized on upload.
"""

import asyncio
from functools import partial

import cloudinary
import cloudinary.exceptions
import cloudinary.uploader

from quillblog.configs.settings import settings
from quillblog.errors.upload import AssetDeleteError, AssetUploadError
from quillblog.monitoring.logging import get_logger
from quillblog.services.storage.base import StoredAsset

logger = get_logger(__name__)


class CloudinaryAssetStore:
    """Asset store backed by Cloudinary."""

    def __init__(self, folder: str | None = None) -> None:
        """Initialize Cloudinary with configured credentials."""
        cloudinary.config(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            secure=True,
        )
        self.folder = folder or settings.CLOUDINARY_FOLDER

    async def upload(self, file_data: bytes, content_type: str) -> StoredAsset:
        """
        Upload an image to Cloudinary.

        Args:
            file_data: Raw image bytes
            content_type: MIME type of the image

        Returns:
            StoredAsset: `secure_url` and `public_id` of the new asset

        Raises:
            AssetUploadError: If Cloudinary fails or returns no URL
        """
        # Run blocking Cloudinary upload in thread pool
        loop = asyncio.get_running_loop()
        try:
            result = await loop.run_in_executor(
                None,
                partial(
                    cloudinary.uploader.upload,
                    file_data,
                    folder=self.folder,
                    resource_type="image",
                    transformation=[{"quality": "auto:good", "fetch_format": "auto"}],
                ),
            )
        except (cloudinary.exceptions.Error, OSError) as e:
            logger.warning("Cloudinary upload failed", content_type=content_type, error=str(e))
            raise AssetUploadError from e

        url, public_id = result.get("secure_url"), result.get("public_id")
        if not url or not public_id:
            raise AssetUploadError
        return StoredAsset(url=url, asset_id=public_id)

    async def delete(self, asset_id: str) -> bool:
        """
        Delete an image from Cloudinary.

        Args:
            asset_id: Cloudinary public ID

        Returns:
            bool: True if Cloudinary reports the asset removed

        Raises:
            AssetDeleteError: If the Cloudinary call fails
        """
        loop = asyncio.get_running_loop()
        try:
            result = await loop.run_in_executor(
                None,
                partial(cloudinary.uploader.destroy, asset_id, resource_type="image"),
            )
        except (cloudinary.exceptions.Error, OSError) as e:
            raise AssetDeleteError(asset_id) from e

        return result.get("result") == "ok"
