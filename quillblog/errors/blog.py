"""
Blog lifecycle error taxonomy.

Every failure that leaves `BlogService` is one of these. Storage and asset
provider exceptions are translated at the service boundary.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from quillblog.errors.base import BaseAppError, create_exception_handler
from quillblog.errors.database import DatabaseError, DuplicateEntryError, RecordNotFoundError
from quillblog.monitoring.logging import get_logger

logger = get_logger(__name__)


class BlogError(BaseAppError):
    """Base exception for blog lifecycle errors."""


class UnauthenticatedError(BlogError):
    """Exception raised when a mutating request carries no caller identity."""

    def __init__(self, detail: str = "Unauthorized User") -> None:
        super().__init__(detail, HTTP_401_UNAUTHORIZED)


class ValidationError(BlogError):
    """Exception raised when a post payload breaks a field rule."""

    def __init__(self, detail: str = "Invalid Input", field: str | None = None) -> None:
        super().__init__(detail, HTTP_400_BAD_REQUEST)
        self.field = field


class NotFoundError(BlogError):
    """Exception raised when no post exists for a slug."""

    def __init__(self, detail: str = "Post Not Found") -> None:
        super().__init__(detail, HTTP_404_NOT_FOUND)


class ForbiddenError(BlogError):
    """Exception raised when the caller does not own the post."""

    def __init__(self, detail: str = "Forbidden") -> None:
        super().__init__(detail, HTTP_403_FORBIDDEN)


class ConflictError(BlogError):
    """Exception raised on slug collisions or unresolved category races."""

    def __init__(self, detail: str = "A post with this title already exists") -> None:
        super().__init__(detail, HTTP_409_CONFLICT)


class StorageError(BlogError):
    """Exception raised when persistence fails for any other reason."""

    def __init__(self, detail: str = "Database Error", operation: str | None = None) -> None:
        super().__init__(detail, HTTP_500_INTERNAL_SERVER_ERROR)
        self.operation = operation


blog_exception_handler = create_exception_handler(logger)


@contextmanager
def translate_storage_errors(operation: str, **context: object) -> Iterator[None]:
    """
    Map repository and driver exceptions onto the blog error taxonomy.

    Args:
        operation: Name of the lifecycle operation, logged with failures
        **context: Extra key/value pairs for the log event
    """
    try:
        yield
    except RecordNotFoundError as e:
        raise NotFoundError from e
    except DuplicateEntryError as e:
        raise ConflictError from e
    except (DatabaseError, SQLAlchemyError) as e:
        logger.exception("Storage failure", operation=operation, **context)
        raise StorageError(operation=operation) from e
