"""
Local filesystem asset store.

Development and testing backend. Files are written under `UPLOADS_DIR`, served
from `/uploads`, and addressed by absolute URLs rooted at `PUBLIC_BASE_URL`.
"""

from pathlib import Path
from uuid import uuid4

import aiofiles

from quillblog.configs.settings import settings
from quillblog.errors.upload import AssetDeleteError, AssetUploadError
from quillblog.services.storage.base import StoredAsset

EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


class LocalAssetStore:
    """
    Local filesystem asset store.

    The asset identifier is the file name relative to the blog image folder.
    """

    def __init__(self, uploads_dir: Path | None = None, base_url: str | None = None) -> None:
        """Initialize local storage with configured paths."""
        self.uploads_dir = uploads_dir or settings.UPLOADS_DIR
        self.base_url = (base_url or settings.PUBLIC_BASE_URL).rstrip("/")
        self.base_path = self.uploads_dir / "blog_images"
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _get_file_path(self, asset_id: str) -> Path:
        # Asset ids are bare file names; reject anything that walks out of the folder
        path = (self.base_path / asset_id).resolve()
        if path.parent != self.base_path.resolve():
            raise AssetDeleteError(asset_id, detail=f"Invalid asset id: {asset_id}")
        return path

    async def upload(self, file_data: bytes, content_type: str) -> StoredAsset:
        """
        Write an image to the uploads folder.

        Args:
            file_data: Raw image bytes
            content_type: MIME type of the image

        Returns:
            StoredAsset: Public URL and file name of the new asset
        """
        asset_id = f"{uuid4().hex}.{EXTENSIONS.get(content_type, 'jpg')}"
        try:
            async with aiofiles.open(self.base_path / asset_id, "wb") as f:
                await f.write(file_data)
        except OSError as e:
            raise AssetUploadError from e

        return StoredAsset(url=f"{self.base_url}/uploads/blog_images/{asset_id}", asset_id=asset_id)

    async def delete(self, asset_id: str) -> bool:
        """
        Remove an image from the uploads folder.

        Args:
            asset_id: File name returned by `upload`

        Returns:
            bool: True if a file was removed
        """
        file_path = self._get_file_path(asset_id)
        if not file_path.exists():
            return False
        try:
            file_path.unlink()
        except OSError as e:
            raise AssetDeleteError(asset_id) from e
        return True
