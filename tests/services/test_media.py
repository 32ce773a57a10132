from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest
from starlette.datastructures import UploadFile

from quillblog.errors.upload import (
    AssetUploadError,
    ImageTooLargeError,
    InvalidImageError,
    UnsupportedImageTypeError,
)
from quillblog.services.media import MediaService
from quillblog.services.storage.base import AssetStore, StoredAsset


@pytest.fixture
def store() -> MagicMock:
    mock = MagicMock(spec=AssetStore)
    mock.upload = AsyncMock(return_value=StoredAsset(url="https://example.com/a.jpg", asset_id="a"))
    mock.delete = AsyncMock(return_value=True)
    return mock


@pytest.mark.asyncio
async def test_upload_featured_image_delegates_to_store(
    store: MagicMock,
    make_upload: Callable[..., UploadFile],
    jpeg_bytes: bytes,
) -> None:
    service = MediaService(store=store)

    asset = await service.upload_featured_image(make_upload())

    assert asset == StoredAsset(url="https://example.com/a.jpg", asset_id="a")
    store.upload.assert_awaited_once_with(jpeg_bytes, "image/jpeg")


@pytest.mark.asyncio
async def test_unsupported_type_never_reaches_store(
    store: MagicMock,
    make_upload: Callable[..., UploadFile],
) -> None:
    service = MediaService(store=store)

    with pytest.raises(UnsupportedImageTypeError):
        await service.upload_featured_image(make_upload(data=b"GIF89a", content_type="image/gif"))

    store.upload.assert_not_called()


@pytest.mark.asyncio
async def test_oversized_image_rejected(
    store: MagicMock,
    make_upload: Callable[..., UploadFile],
) -> None:
    service = MediaService(store=store)
    service.image_max_size_bytes = 10

    with pytest.raises(ImageTooLargeError):
        await service.upload_featured_image(make_upload())

    store.upload.assert_not_called()


@pytest.mark.asyncio
async def test_corrupted_image_rejected(
    store: MagicMock,
    make_upload: Callable[..., UploadFile],
) -> None:
    service = MediaService(store=store)

    with pytest.raises(InvalidImageError):
        await service.upload_featured_image(make_upload(data=b"definitely not a jpeg"))


@pytest.mark.asyncio
async def test_empty_image_rejected(
    store: MagicMock,
    make_upload: Callable[..., UploadFile],
) -> None:
    service = MediaService(store=store)

    with pytest.raises(InvalidImageError, match="empty"):
        await service.read_featured_image(make_upload(data=b""))


@pytest.mark.asyncio
async def test_store_failure_propagates(
    store: MagicMock,
    make_upload: Callable[..., UploadFile],
) -> None:
    store.upload.side_effect = AssetUploadError
    service = MediaService(store=store)

    with pytest.raises(AssetUploadError):
        await service.upload_featured_image(make_upload())


@pytest.mark.asyncio
async def test_delete_asset(store: MagicMock) -> None:
    service = MediaService(store=store)

    assert await service.delete_asset("a") is True
    store.delete.assert_awaited_once_with("a")
