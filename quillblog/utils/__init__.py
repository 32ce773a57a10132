"""Utility helper functions."""

from quillblog.utils.helpers import (
    get_summary,
    host,
    normalize_category_name,
    slugify_title,
    today_str,
)

__all__ = [
    "get_summary",
    "host",
    "normalize_category_name",
    "slugify_title",
    "today_str",
]
