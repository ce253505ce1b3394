from collections.abc import MutableMapping
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, Request
from fastapi.routing import APIRoute
from starlette.routing import BaseRoute, Match, Route

from blog_api.models.blog import BlogDB
from blog_api.models.user import UserDB

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def host(request: Request) -> str:
    """Return the host IP address."""
    return request.client.host if request.client else "unknown"


def today_str() -> str:
    """Return the current local time as a string."""
    return datetime.now(datetime.now().astimezone().tzinfo).strftime(DATE_FORMAT)


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


def format_datetime(value: datetime) -> str:
    # SQLite hands back naive datetimes; they were written as UTC.
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone().strftime(DATE_FORMAT)


def response_datetime(db: UserDB | BlogDB) -> dict[str, Any]:
    """
    Format datetime for response.

    Args:
        db: Database model

    Returns:
        dict[str, Any]: Dictionary with formatted datetimes
    """
    db_dict = db.model_dump()

    db_dict["created_at"] = format_datetime(db.created_at)

    db_dict["updated_at"] = "No updates"
    if updated := db.updated_at:
        db_dict["updated_at"] = format_datetime(updated)

    return db_dict
