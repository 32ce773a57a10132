"""
Base protocol for featured image asset stores.

This module defines the interface the blog lifecycle relies on, allowing
for different implementations (local, cloudinary, S3, etc.).
"""

from abc import abstractmethod
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class StoredAsset:
    """Result of an upload: public URL plus the store's asset identifier."""

    url: str
    asset_id: str


class AssetStore(Protocol):
    """
    Protocol defining the interface for asset stores.

    Implementations raise `AssetUploadError` / `AssetDeleteError` on transport
    failures; provider exceptions never escape.
    """

    @abstractmethod
    async def upload(self, file_data: bytes, content_type: str) -> StoredAsset:
        """
        Upload an image.

        Args:
            file_data: Raw image bytes
            content_type: MIME type of the image

        Returns:
            StoredAsset: Public URL and asset identifier
        """
        ...

    @abstractmethod
    async def delete(self, asset_id: str) -> bool:
        """
        Delete a previously uploaded asset.

        Args:
            asset_id: Identifier returned by `upload`

        Returns:
            bool: True if the asset was removed, False if it did not exist
        """
        ...
