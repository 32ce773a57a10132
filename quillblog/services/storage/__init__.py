"""
Asset storage package.

This package provides storage backends for featured images,
with support for local filesystem and Cloudinary.
"""

from quillblog.configs.settings import settings
from quillblog.services.storage.base import AssetStore, StoredAsset
from quillblog.services.storage.cloudinary_storage import CloudinaryAssetStore
from quillblog.services.storage.local import LocalAssetStore


def get_asset_store() -> AssetStore:
    """
    Get the configured asset store.

    Returns the appropriate implementation based on the STORAGE_PROVIDER
    setting.

    Returns:
        AssetStore: Configured asset store instance
    """
    if settings.STORAGE_PROVIDER == "cloudinary":
        return CloudinaryAssetStore()
    return LocalAssetStore()


__all__ = [
    "AssetStore",
    "CloudinaryAssetStore",
    "LocalAssetStore",
    "StoredAsset",
    "get_asset_store",
]
