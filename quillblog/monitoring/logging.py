"""
Structured logging for the QuillBlog backend.

Every module logs through structlog with key/value context:

>>> from quillblog.monitoring import get_logger
>>> logger = get_logger(__name__)
>>> logger.info("Blog created", slug="hello-world", author_id="user_123")

Development renders colored console lines with rich tracebacks; every other
environment renders one JSON object per line. Standard library records
(uvicorn, SQLAlchemy, alembic) go through the same renderer.

Scrubbing
---------
Before rendering, each event is scrubbed:
  - control characters are escaped so a value can't forge a log line
  - identity tokens and email addresses inside strings are masked
  - values under credential keys (bearer tokens, storage secrets) and
    credential headers are replaced outright
"""

from logging import INFO, Handler, StreamHandler, root
from logging.handlers import RotatingFileHandler
from pathlib import Path
from re import Pattern
from re import compile as re_compile
from typing import Any

from structlog import configure
from structlog import get_logger as struct_logger
from structlog.contextvars import bind_contextvars, clear_contextvars, merge_contextvars
from structlog.dev import ConsoleRenderer, RichTracebackFormatter
from structlog.processors import (
    JSONRenderer,
    StackInfoRenderer,
    UnicodeDecoder,
    add_log_level,
    format_exc_info,
)
from structlog.stdlib import (
    BoundLogger,
    ExtraAdder,
    LoggerFactory,
    PositionalArgumentsFormatter,
    ProcessorFormatter,
    add_logger_name,
    filter_by_level,
)
from structlog.types import EventDict, Processor, WrappedLogger

from quillblog.configs.settings import settings
from quillblog.utils.helpers import today_str

REDACTED = "[REDACTED]"

CREDENTIAL_HEADERS: frozenset[str] = frozenset(
    {"authorization", "proxy-authorization", "cookie", "x-api-key"},
)

# Event keys whose values are never logged
CREDENTIAL_KEYS: frozenset[str] = frozenset(
    {"token", "access_token", "authorization", "api_secret", "secret_key"},
)

# JWT first: its segments could otherwise be mistaken for other patterns
PII_PATTERNS: tuple[tuple[Pattern, str], ...] = (
    (re_compile(r"eyJ[\w-]*\.eyJ[\w-]*\.[\w-]*"), "[REDACTED_JWT]"),
    (re_compile(r"[\w.%+-]+@[\w.-]+\.[a-zA-Z]{2,}"), "[REDACTED_EMAIL]"),
)

CONTROL_CHARS = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": ""})


def sanitize_log_message(message: str) -> str:
    r"""
    Escape control characters.

    >>> sanitize_log_message("Hello\nWorld")
    'Hello\\nWorld'
    """
    return message.translate(CONTROL_CHARS)


def redact_pii(message: str) -> str:
    """
    Mask identity tokens and email addresses.

    >>> redact_pii("synced alice@example.com")
    'synced [REDACTED_EMAIL]'
    """
    for pattern, replacement in PII_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


def sanitize_headers(headers: dict[str, Any]) -> dict[str, Any]:
    """Replace credential header values, keeping the header names."""
    return {
        name: REDACTED if name.lower() in CREDENTIAL_HEADERS else value
        for name, value in headers.items()
    }


def _scrub(key: str, value: Any) -> Any:
    if key.lower() in CREDENTIAL_KEYS:
        return REDACTED
    if isinstance(value, str):
        return redact_pii(sanitize_log_message(value))
    if key.lower() == "headers" and isinstance(value, dict):
        return sanitize_headers(value)
    return value


def sanitize_event_dict(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """structlog processor applying `_scrub` to every event value."""
    return {key: _scrub(key, value) for key, value in event_dict.items()}


def add_timestamp(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    event_dict["timestamp"] = today_str()
    return event_dict


def _renderer(*, colors: bool) -> Processor:
    if settings.ENVIRONMENT == "development":
        return ConsoleRenderer(
            colors=colors,
            pad_level=False,
            exception_formatter=RichTracebackFormatter(),
        )
    return JSONRenderer()


def _attach(handler: Handler, *, colors: bool) -> None:
    """Route stdlib records through scrubbing and the environment renderer."""
    handler.setFormatter(
        ProcessorFormatter(
            processors=[
                ExtraAdder(),
                sanitize_event_dict,
                ProcessorFormatter.remove_processors_meta,
                _renderer(colors=colors),
            ],
            foreign_pre_chain=[add_log_level, add_timestamp],
        ),
    )
    root.addHandler(handler)


def configure_logging() -> None:
    """Configure structlog and the root logger. Safe to call on every reload."""
    root.handlers.clear()
    root.setLevel(settings.LOG_LEVEL.upper())

    configure(
        processors=[
            filter_by_level,
            merge_contextvars,
            add_logger_name,
            add_log_level,
            add_timestamp,
            PositionalArgumentsFormatter(),
            StackInfoRenderer(),
            format_exc_info,
            UnicodeDecoder(),
            ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=BoundLogger,
        cache_logger_on_first_use=True,
    )

    _attach(StreamHandler(), colors=True)

    if settings.LOG_TO_FILE:
        log_file = Path(settings.LOG_FILE)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=5)
        file_handler.setLevel(INFO)
        _attach(file_handler, colors=False)


def get_logger(name: str) -> BoundLogger:
    return struct_logger(name)


def bind_request_id(request_id: str) -> None:
    """Tag every event of the current request with its id."""
    bind_contextvars(request_id=request_id)


def bind_caller(user_id: str) -> None:
    """Tag every event of the current request with the verified caller."""
    bind_contextvars(caller=user_id)


def clear_context() -> None:
    clear_contextvars()
