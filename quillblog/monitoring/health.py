"""
Health checks with database validation.

Response Format
---------------
{
    "status": "ok" | "degraded",
    "timestamp": "2025-01-01 12:00:00",
    "version": "1.0.0",
    "checks": {
        "database": {"status": "pass", "response_ms": 15}
    }
}
"""

from asyncio import wait_for
from dataclasses import dataclass, field
from enum import StrEnum
from time import perf_counter
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from quillblog.monitoring.logging import get_logger

logger = get_logger(__name__)

# Health check timeouts (seconds)
DATABASE_CHECK_TIMEOUT = 2.0


class CheckStatus(StrEnum):
    """Status values for individual health checks."""

    PASS = "pass"
    FAIL = "fail"


@dataclass
class ComponentCheck:
    """
    Result of an individual health check component.

    Attributes
    ----------
    status : CheckStatus
        Status of the check (pass, fail)
    response_ms : int | None
        Response time in milliseconds
    message : str | None
        Optional message or error details
    details : dict[str, Any]
        Additional check-specific details
    """

    status: CheckStatus
    response_ms: int | None = None
    message: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary format."""
        result: dict[str, Any] = {"status": self.status.value}
        if self.response_ms is not None:
            result["response_ms"] = self.response_ms
        if self.message is not None:
            result["message"] = self.message
        if self.details:
            result.update(self.details)
        return result


async def check_database(session: AsyncSession) -> ComponentCheck:
    """
    Check database connectivity with a `SELECT 1` round trip.

    Args:
        session: Database session for the current request.

    Returns:
        ComponentCheck with database status.
    """
    start = perf_counter()
    try:
        await wait_for(session.execute(text("SELECT 1")), timeout=DATABASE_CHECK_TIMEOUT)
    except TimeoutError:
        elapsed_ms = int((perf_counter() - start) * 1000)
        logger.warning("Database health check timed out", response_ms=elapsed_ms)
        return ComponentCheck(
            status=CheckStatus.FAIL,
            response_ms=elapsed_ms,
            message="Database check timed out",
        )
    except (SQLAlchemyError, ConnectionError, OSError) as e:
        elapsed_ms = int((perf_counter() - start) * 1000)
        logger.warning("Database health check failed", error=str(e))
        return ComponentCheck(
            status=CheckStatus.FAIL,
            response_ms=elapsed_ms,
            message=f"Database check failed: {e!s}",
        )

    return ComponentCheck(
        status=CheckStatus.PASS,
        response_ms=int((perf_counter() - start) * 1000),
    )
