"""Utility helper functions."""

from blog_api.utils.helpers import (
    format_datetime,
    get_summary,
    host,
    response_datetime,
    today_str,
)

__all__ = [
    "format_datetime",
    "get_summary",
    "host",
    "response_datetime",
    "today_str",
]
