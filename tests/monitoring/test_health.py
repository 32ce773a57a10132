"""Tests for monitoring health module."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from quillblog.monitoring.health import CheckStatus, ComponentCheck, check_database


class TestComponentCheck:
    """Tests for ComponentCheck dataclass."""

    def test_to_dict_with_all_fields(self) -> None:
        check = ComponentCheck(
            status=CheckStatus.PASS,
            response_ms=15,
            message="OK",
            details={"pool": "ready"},
        )
        result = check.to_dict()
        assert result == {"status": "pass", "response_ms": 15, "message": "OK", "pool": "ready"}

    def test_to_dict_minimal(self) -> None:
        assert ComponentCheck(status=CheckStatus.FAIL).to_dict() == {"status": "fail"}


class TestCheckDatabase:
    @pytest.mark.asyncio
    async def test_pass(self, session: AsyncSession) -> None:
        result = await check_database(session)

        assert result.status is CheckStatus.PASS
        assert result.response_ms is not None

    @pytest.mark.asyncio
    async def test_fail(self) -> None:
        session = MagicMock()
        session.execute = AsyncMock(side_effect=OperationalError("SELECT 1", {}, Exception("down")))

        result = await check_database(session)

        assert result.status is CheckStatus.FAIL
        assert result.message is not None
        assert "Database check failed" in result.message
