"""
Monitoring and observability module for the QuillBlog backend.

Usage
-----
>>> from quillblog.monitoring import configure_logging, get_logger
>>> configure_logging()
>>> logger = get_logger(__name__)
"""

from quillblog.monitoring.health import CheckStatus, ComponentCheck, check_database
from quillblog.monitoring.logging import (
    bind_caller,
    bind_request_id,
    clear_context,
    configure_logging,
    get_logger,
    redact_pii,
    sanitize_headers,
    sanitize_log_message,
)

__all__ = [
    "CheckStatus",
    "ComponentCheck",
    "bind_caller",
    "bind_request_id",
    "check_database",
    "clear_context",
    "configure_logging",
    "get_logger",
    "redact_pii",
    "sanitize_headers",
    "sanitize_log_message",
]
