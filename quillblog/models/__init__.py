"""Database models for the application."""

from quillblog.models.blog import BlogDB
from quillblog.models.category import CategoryDB
from quillblog.models.user import UserDB

__all__ = ["BlogDB", "CategoryDB", "UserDB"]
