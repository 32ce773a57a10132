# tests/routes/test_rate_limits.py
"""Rate limits applied to the blog endpoints."""

import pytest
from httpx import AsyncClient

from quillblog.managers.rate_limiter import limiter


@pytest.mark.asyncio
async def test_create_endpoint_is_limited(client: AsyncClient) -> None:
    limiter.enabled = True
    limiter.reset()
    try:
        statuses = [(await client.post("/blogs", data={})).status_code for _ in range(11)]
        limited = await client.post("/blogs", data={})
    finally:
        limiter.reset()
        limiter.enabled = False

    assert statuses[:10] == [401] * 10
    assert statuses[10] == 429
    assert limited.json()["detail"] == "Rate limit exceeded"


@pytest.mark.asyncio
async def test_health_is_exempt(client: AsyncClient) -> None:
    limiter.enabled = True
    limiter.reset()
    try:
        statuses = {(await client.get("/health")).status_code for _ in range(70)}
    finally:
        limiter.reset()
        limiter.enabled = False

    assert statuses == {200}
