# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os
import tempfile

# Settings are read at import time, so the test environment must be in place
# before anything from quillblog is imported.
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["IDENTITY_SECRET_KEY"] = "test-identity-secret"
os.environ["IDENTITY_ALGORITHM"] = "HS256"
os.environ["STORAGE_PROVIDER"] = "local"
os.environ["UPLOADS_DIR"] = tempfile.mkdtemp(prefix="quillblog-uploads-")

from collections.abc import AsyncGenerator, Callable  # noqa: E402
from datetime import UTC, datetime, timedelta  # noqa: E402
from io import BytesIO  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from jose import jwt  # noqa: E402
from PIL import Image  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker  # noqa: E402
from starlette.datastructures import Headers, UploadFile  # noqa: E402

from quillblog.configs import settings  # noqa: E402
from quillblog.db import build_engine, build_session_maker, init_db  # noqa: E402
from quillblog.errors.upload import AssetDeleteError, AssetUploadError  # noqa: E402
from quillblog.schemas.user import CallerIdentity  # noqa: E402
from quillblog.services.media import MediaService  # noqa: E402
from quillblog.services.storage import StoredAsset  # noqa: E402


class FakeAssetStore:
    """In-memory asset store recording every call."""

    def __init__(self) -> None:
        self.assets: dict[str, bytes] = {}
        self.uploads: list[str] = []
        self.deleted: list[str] = []
        self.fail_uploads = False
        self.fail_deletes = False

    async def upload(self, file_data: bytes, content_type: str) -> StoredAsset:
        if self.fail_uploads:
            raise AssetUploadError
        asset_id = f"asset-{len(self.uploads) + 1}"
        self.uploads.append(asset_id)
        self.assets[asset_id] = file_data
        return StoredAsset(url=f"https://assets.test/{asset_id}.jpg", asset_id=asset_id)

    async def delete(self, asset_id: str) -> bool:
        if self.fail_deletes:
            raise AssetDeleteError(asset_id)
        self.deleted.append(asset_id)
        return self.assets.pop(asset_id, None) is not None


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory database per test."""
    test_engine = build_engine("sqlite+aiosqlite:///:memory:")
    await init_db(bind=test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker:
    return build_session_maker(engine)


@pytest.fixture
async def session(session_maker: async_sessionmaker) -> AsyncGenerator[AsyncSession]:
    async with session_maker() as db_session:
        yield db_session


@pytest.fixture
def asset_store() -> FakeAssetStore:
    return FakeAssetStore()


@pytest.fixture
def media(asset_store: FakeAssetStore) -> MediaService:
    return MediaService(store=asset_store)


@pytest.fixture
def alice() -> CallerIdentity:
    return CallerIdentity(user_id="u1", email="alice@example.com", username="alice")


@pytest.fixture
def bob() -> CallerIdentity:
    return CallerIdentity(user_id="u2", email="bob@example.com", username="bob")


@pytest.fixture
def make_token() -> Callable[..., str]:
    """Build identity tokens signed like the identity provider's."""

    def _make(sub: str | None, expires_in: timedelta = timedelta(minutes=30), **claims: Any) -> str:
        payload: dict[str, Any] = {"exp": datetime.now(tz=UTC) + expires_in, **claims}
        if sub is not None:
            payload["sub"] = sub
        return jwt.encode(
            payload,
            settings.IDENTITY_SECRET_KEY.get_secret_value(),
            algorithm=settings.IDENTITY_ALGORITHM,
        )

    return _make


@pytest.fixture
def jpeg_bytes() -> bytes:
    """Create valid JPEG image bytes."""
    img = Image.new("RGB", (200, 200), color="red")
    buffer = BytesIO()
    img.save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def make_upload(jpeg_bytes: bytes) -> Callable[..., UploadFile]:
    """Build uploaded files the way Starlette's form parser does."""

    def _make(
        data: bytes | None = None,
        content_type: str = "image/jpeg",
        filename: str = "cover.jpg",
    ) -> UploadFile:
        return UploadFile(
            file=BytesIO(jpeg_bytes if data is None else data),
            filename=filename,
            headers=Headers({"content-type": content_type}),
        )

    return _make
