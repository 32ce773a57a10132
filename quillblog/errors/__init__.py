from quillblog.errors.base import BaseAppError, create_exception_handler
from quillblog.errors.blog import (
    BlogError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    StorageError,
    UnauthenticatedError,
    ValidationError,
    blog_exception_handler,
    translate_storage_errors,
)
from quillblog.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DuplicateEntryError,
    RecordNotFoundError,
    database_exception_handler,
)
from quillblog.errors.upload import (
    AssetDeleteError,
    AssetError,
    AssetUploadError,
    ImageTooLargeError,
    InvalidImageError,
    UnsupportedImageTypeError,
    UploadError,
    upload_exception_handler,
)
from quillblog.errors.validation import validation_exception_handler

__all__ = [
    "AssetDeleteError",
    "AssetError",
    "AssetUploadError",
    "BaseAppError",
    "BlogError",
    "ConflictError",
    "DatabaseConnectionError",
    "DatabaseError",
    "DuplicateEntryError",
    "ForbiddenError",
    "ImageTooLargeError",
    "InvalidImageError",
    "NotFoundError",
    "RecordNotFoundError",
    "StorageError",
    "UnauthenticatedError",
    "UnsupportedImageTypeError",
    "UploadError",
    "ValidationError",
    "blog_exception_handler",
    "create_exception_handler",
    "database_exception_handler",
    "translate_storage_errors",
    "upload_exception_handler",
    "validation_exception_handler",
]
