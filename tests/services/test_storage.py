# tests/services/test_storage.py
"""Tests for asset stores."""

from pathlib import Path
from unittest.mock import patch

import cloudinary.exceptions
import pytest

from quillblog.configs import settings
from quillblog.errors.upload import AssetDeleteError, AssetUploadError
from quillblog.services.storage import (
    CloudinaryAssetStore,
    LocalAssetStore,
    StoredAsset,
    get_asset_store,
)


class TestLocalAssetStore:
    """Tests for LocalAssetStore."""

    @pytest.fixture
    def store(self, tmp_path: Path) -> LocalAssetStore:
        return LocalAssetStore(uploads_dir=tmp_path, base_url="https://blog.test/")

    @pytest.mark.asyncio
    async def test_upload_writes_file(self, store: LocalAssetStore, jpeg_bytes: bytes) -> None:
        asset = await store.upload(jpeg_bytes, "image/jpeg")

        assert asset.url == f"https://blog.test/uploads/blog_images/{asset.asset_id}"
        assert asset.asset_id.endswith(".jpg")
        assert (store.base_path / asset.asset_id).read_bytes() == jpeg_bytes

    @pytest.mark.asyncio
    async def test_url_defaults_to_public_base_url(self, tmp_path: Path) -> None:
        with patch.object(settings, "PUBLIC_BASE_URL", "http://localhost:9000/"):
            store = LocalAssetStore(uploads_dir=tmp_path)

        asset = await store.upload(b"jpeg-bytes", "image/jpeg")

        assert asset.url == f"http://localhost:9000/uploads/blog_images/{asset.asset_id}"

    @pytest.mark.asyncio
    async def test_extension_follows_content_type(self, store: LocalAssetStore) -> None:
        asset = await store.upload(b"png-bytes", "image/png")
        assert asset.asset_id.endswith(".png")

    @pytest.mark.asyncio
    async def test_each_upload_gets_new_id(self, store: LocalAssetStore, jpeg_bytes: bytes) -> None:
        first = await store.upload(jpeg_bytes, "image/jpeg")
        second = await store.upload(jpeg_bytes, "image/jpeg")
        assert first.asset_id != second.asset_id

    @pytest.mark.asyncio
    async def test_delete_removes_file(self, store: LocalAssetStore, jpeg_bytes: bytes) -> None:
        asset = await store.upload(jpeg_bytes, "image/jpeg")

        assert await store.delete(asset.asset_id) is True
        assert not (store.base_path / asset.asset_id).exists()

    @pytest.mark.asyncio
    async def test_delete_missing_returns_false(self, store: LocalAssetStore) -> None:
        assert await store.delete("missing.jpg") is False

    @pytest.mark.asyncio
    async def test_delete_rejects_path_traversal(self, store: LocalAssetStore) -> None:
        with pytest.raises(AssetDeleteError):
            await store.delete("../../etc/passwd")

    @pytest.mark.asyncio
    async def test_write_failure_raises_upload_error(
        self,
        store: LocalAssetStore,
        jpeg_bytes: bytes,
    ) -> None:
        with patch("quillblog.services.storage.local.aiofiles.open", side_effect=OSError("disk full")):
            with pytest.raises(AssetUploadError):
                await store.upload(jpeg_bytes, "image/jpeg")


class TestCloudinaryAssetStore:
    """Tests for CloudinaryAssetStore with the SDK patched out."""

    @pytest.fixture
    def store(self) -> CloudinaryAssetStore:
        return CloudinaryAssetStore(folder="blogs-test")

    @pytest.mark.asyncio
    async def test_upload_returns_secure_url_and_public_id(
        self,
        store: CloudinaryAssetStore,
        jpeg_bytes: bytes,
    ) -> None:
        with patch("cloudinary.uploader.upload") as mock_upload:
            mock_upload.return_value = {
                "secure_url": "https://res.cloudinary.com/demo/image/upload/blogs-test/abc.jpg",
                "public_id": "blogs-test/abc",
            }

            asset = await store.upload(jpeg_bytes, "image/jpeg")

        assert asset == StoredAsset(
            url="https://res.cloudinary.com/demo/image/upload/blogs-test/abc.jpg",
            asset_id="blogs-test/abc",
        )
        _, kwargs = mock_upload.call_args
        assert kwargs["folder"] == "blogs-test"
        assert kwargs["resource_type"] == "image"

    @pytest.mark.asyncio
    async def test_upload_sdk_error_is_translated(
        self,
        store: CloudinaryAssetStore,
        jpeg_bytes: bytes,
    ) -> None:
        with patch("cloudinary.uploader.upload", side_effect=cloudinary.exceptions.Error("boom")):
            with pytest.raises(AssetUploadError):
                await store.upload(jpeg_bytes, "image/jpeg")

    @pytest.mark.asyncio
    async def test_upload_without_url_is_an_error(
        self,
        store: CloudinaryAssetStore,
        jpeg_bytes: bytes,
    ) -> None:
        with patch("cloudinary.uploader.upload", return_value={"public_id": "x"}):
            with pytest.raises(AssetUploadError):
                await store.upload(jpeg_bytes, "image/jpeg")

    @pytest.mark.asyncio
    async def test_delete_ok(self, store: CloudinaryAssetStore) -> None:
        with patch("cloudinary.uploader.destroy", return_value={"result": "ok"}) as mock_destroy:
            assert await store.delete("blogs-test/abc") is True

        mock_destroy.assert_called_once_with("blogs-test/abc", resource_type="image")

    @pytest.mark.asyncio
    async def test_delete_not_found(self, store: CloudinaryAssetStore) -> None:
        with patch("cloudinary.uploader.destroy", return_value={"result": "not found"}):
            assert await store.delete("blogs-test/missing") is False

    @pytest.mark.asyncio
    async def test_delete_sdk_error_is_translated(self, store: CloudinaryAssetStore) -> None:
        with patch("cloudinary.uploader.destroy", side_effect=cloudinary.exceptions.Error("boom")):
            with pytest.raises(AssetDeleteError):
                await store.delete("blogs-test/abc")


def test_get_asset_store_defaults_to_local() -> None:
    assert isinstance(get_asset_store(), LocalAssetStore)


def test_get_asset_store_cloudinary() -> None:
    with patch.object(settings, "STORAGE_PROVIDER", "cloudinary"):
        assert isinstance(get_asset_store(), CloudinaryAssetStore)
