"""
Repository-level persistence errors.

Repositories raise these; the blog service translates them into the
lifecycle taxonomy (`NotFoundError`, `ConflictError`, `StorageError`) with
`translate_storage_errors`. The handler below only sees the ones raised
outside a lifecycle operation.
"""

from starlette.status import (
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from quillblog.errors.base import BaseAppError, create_exception_handler
from quillblog.monitoring.logging import get_logger

logger = get_logger(__name__)


class DatabaseError(BaseAppError):
    """A write or read failed in the database."""

    def __init__(
        self,
        detail: str = "Database Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail, status_code)


class DatabaseConnectionError(DatabaseError):
    """The driver or pool failed: connection lost, timeout, bad statement."""

    def __init__(self, detail: str = "Failed to connect to the database") -> None:
        super().__init__(detail)


class DuplicateEntryError(DatabaseError):
    """A unique constraint (post slug, category name, author id) was violated."""

    def __init__(self, detail: str = "A record with this value already exists") -> None:
        super().__init__(detail, HTTP_409_CONFLICT)


class RecordNotFoundError(DatabaseError):
    """The row addressed by a write does not exist."""

    def __init__(self, detail: str = "Record not found") -> None:
        super().__init__(detail, HTTP_404_NOT_FOUND)


database_exception_handler = create_exception_handler(logger)
