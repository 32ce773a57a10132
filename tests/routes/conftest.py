# tests/routes/conftest.py
"""Pytest fixtures for route tests."""

from collections.abc import AsyncGenerator, Callable

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from quillblog.db import get_session
from quillblog.dependencies import get_media_service
from quillblog.main import app
from quillblog.managers.rate_limiter import limiter
from quillblog.services.media import MediaService


@pytest.fixture
async def client(
    session_maker: async_sessionmaker,
    media: MediaService,
) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client bound to the test database and asset store."""

    async def override_session() -> AsyncGenerator[AsyncSession]:
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_media_service] = lambda: media
    limiter.enabled = False
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac
    limiter.enabled = True
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(make_token: Callable[..., str]) -> Callable[..., dict[str, str]]:
    """Build bearer headers for an identity."""

    def _headers(sub: str = "u1", **claims: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {make_token(sub, **claims)}"}

    return _headers
