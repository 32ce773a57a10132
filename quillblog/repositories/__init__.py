"""Repository layer for database operations."""

from quillblog.repositories.blog import BlogRepository
from quillblog.repositories.category import CategoryRepository
from quillblog.repositories.user import UserRepository

__all__ = ["BlogRepository", "CategoryRepository", "UserRepository"]
