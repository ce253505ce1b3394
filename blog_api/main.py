# blog_api/main.py

"""Blogging API - blog posts with search, pagination and author-only mutations."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from blog_api.configs import settings
from blog_api.db import check_database
from blog_api.errors import (
    BlogError,
    DatabaseError,
    PasswordHashingError,
    UserAuthenticationError,
    auth_exception_handler,
    blog_exception_handler,
    database_exception_handler,
    validation_exception_handler,
)
from blog_api.managers import limiter, rate_limit_exceeded_handler
from blog_api.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from blog_api.routes import auth_router, blog_router
from blog_api.schemas import HealthCheckResponse
from blog_api.utils.helpers import today_str

app = FastAPI(
    title=settings.APP_NAME,
    description="REST API for writing, publishing and reading blog posts",
    version="1.0.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")


routes = [auth_router, blog_router]

_ = [app.include_router(router) for router in routes]

errors = [
    (RateLimitExceeded, rate_limit_exceeded_handler),
    (UserAuthenticationError, auth_exception_handler),
    (PasswordHashingError, auth_exception_handler),
    (BlogError, blog_exception_handler),
    (DatabaseError, database_exception_handler),
    (SQLAlchemyError, database_exception_handler),
    (RequestValidationError, validation_exception_handler),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]

app.state.limiter = limiter
limiter: Limiter = app.state.limiter


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_model=HealthCheckResponse,
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "version": "1.0.0",
                        "status": "ok",
                        "timestamp": "2025-01-01 09:30:00",
                        "database": "connected",
                    },
                },
            },
        },
        503: {
            "description": "Database unreachable",
            "content": {
                "application/json": {
                    "example": {
                        "version": "1.0.0",
                        "status": "degraded",
                        "timestamp": "2025-01-01 09:30:00",
                        "database": "unreachable",
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
@limiter.exempt
async def health_check(request: Request) -> ORJSONResponse:
    """
    Health check endpoint.

    Parameters
    ----------
    request : Request
        Current request context.

    Returns
    -------
    ORJSONResponse
        Health status including database connectivity.
    """
    database_ok = await check_database()

    response_data = HealthCheckResponse(
        version=app.version,
        status="ok" if database_ok else "degraded",
        timestamp=today_str(),
        database="connected" if database_ok else "unreachable",
    )

    return ORJSONResponse(
        response_data.model_dump(),
        status_code=200 if database_ok else HTTP_503_SERVICE_UNAVAILABLE,
    )


@app.get(
    "/",
    tags=["🏠 Root"],
    summary="Root access",
    response_model=dict[str, str],
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {"message": "Welcome to the Blogging API"},
                },
            },
        },
        429: {
            "description": "Rate limit exceeded",
            "content": {"application/json": {"example": {"message": "Rate limit exceeded"}}},
        },
    },
    operation_id="root_access",
)
@limiter.limit("30/minute")
async def root(request: Request) -> ORJSONResponse:
    """
    Root endpoint.

    Parameters
    ----------
    request : Request
        Current request context.

    Returns
    -------
    ORJSONResponse
        Welcome message.
    """
    return ORJSONResponse(content={"message": f"Welcome to the {settings.APP_NAME}"})
