from collections.abc import Awaitable, Callable
from logging import Logger

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from blog_api.configs import DEFAULT_ERROR_MESSAGE
from blog_api.utils.helpers import host


class BaseAppError(Exception):
    """Base exception class for application errors."""

    def __init__(
        self,
        detail: str = DEFAULT_ERROR_MESSAGE,
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code

    def __str__(self) -> str:
        return self.detail


def error_content(detail: str, status_code: int) -> dict[str, str]:
    """
    Build the error envelope for a response.

    Client errors carry ``{"message": ...}``; server errors carry a generic
    ``{"error": ...}`` so internal details never reach the caller.
    """
    if status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
        return {"error": DEFAULT_ERROR_MESSAGE}
    return {"message": detail}


def create_exception_handler(
    logger: Logger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create a standardized exception handler for the application.

    Args:
        logger: Logger instance to use for logging exceptions.

    Returns:
        A callable exception handler.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        status_code = getattr(exc, "status_code", HTTP_500_INTERNAL_SERVER_ERROR)
        detail = getattr(exc, "detail", None) or str(exc) or DEFAULT_ERROR_MESSAGE

        if status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                f"{type(exc).__name__}: {detail} for ip: {host(request)} "
                f"for endpoint {request.url.path}",
            )
        else:
            logger.warning(f"{detail} for ip: {host(request)} for endpoint {request.url.path}")

        return ORJSONResponse(content=error_content(detail, status_code), status_code=status_code)

    return handler
