from collections.abc import MutableMapping
from datetime import datetime
from typing import Any

from fastapi import FastAPI, Request
from fastapi.routing import APIRoute
from slugify import slugify
from starlette.routing import BaseRoute, Match, Route

from quillblog.configs.settings import SLUG_MAX_LENGTH


def host(request: Request) -> str:
    """Return the host IP address."""
    return request.client.host if request.client else "unknown"


def today_str() -> str:
    """Return today's date as a string."""
    return datetime.now(datetime.now().astimezone().tzinfo).strftime(
        "%Y-%m-%d %H:%M:%S",
    )


def get_summary(request: Request) -> str | None:
    """Extract route summary from request."""

    scope: MutableMapping[str, Any] = request.scope
    app: FastAPI = scope["app"]
    routes: list[BaseRoute] = app.routes

    summary = None
    for route in routes:
        is_api_route = type(route) is APIRoute
        is_route = type(route) is Route
        if is_api_route and route.matches(scope)[0] == Match.FULL:
            summary = route.summary
            break
        if is_route and route.matches(scope)[0] == Match.FULL:
            summary = route.name
            break

    return summary


def slugify_title(title: str) -> str:
    """
    Derive a URL-safe slug from a blog title.

    The slug is lowercase, ASCII only and hyphen separated. Identical titles
    (ignoring surrounding whitespace and case) always give identical slugs.

    Args:
        title: Blog title

    Returns:
        str: Slug, empty if the title holds no sluggable characters
    """
    return slugify(title.strip(), lowercase=True, max_length=SLUG_MAX_LENGTH, word_boundary=True)


def normalize_category_name(raw_name: str) -> str:
    """Return the canonical category key: trimmed and lower-cased."""
    return raw_name.strip().lower()
