"""Authentication routes for handling user signup and login."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import ORJSONResponse
from fastapi.security import OAuth2PasswordRequestForm
from starlette.status import HTTP_201_CREATED

from blog_api.dependencies import AuthServiceDep, UserDBDep
from blog_api.managers import limiter
from blog_api.models import UserDB
from blog_api.schemas.auth import Token
from blog_api.schemas.user import UserCreate, UserResponse
from blog_api.utils import response_datetime

router = APIRouter(prefix="/api/auth", tags=["🔐 Auth"])

USER_EXAMPLE = {
    "id": "123e4567-e89b-12d3-a456-426614174000",
    "first_name": "Ada",
    "last_name": "Lovelace",
    "email": "ada@example.com",
    "created_at": "2025-01-01 09:30:00",
}


def db_user_to_response(db_user: UserDB) -> UserResponse:
    return UserResponse.model_validate(response_datetime(db_user))


@router.post(
    "/signup",
    response_class=ORJSONResponse,
    response_model=UserResponse,
    status_code=HTTP_201_CREATED,
    summary="Register a new user",
    description="Register a new user account. Passwords are stored as Argon2 hashes.",
    responses={
        201: {"content": {"application/json": {"example": USER_EXAMPLE}}},
        409: {
            "description": "Email already registered",
            "content": {
                "application/json": {
                    "example": {"message": "Email 'ada@example.com' already exists"},
                },
            },
        },
        429: {
            "description": "Rate limit exceeded",
            "content": {"application/json": {"example": {"message": "Rate limit exceeded"}}},
        },
    },
    operation_id="auth_signup",
)
@limiter.limit("5/minute")
async def signup(
    request: Request,
    user: UserCreate,
    auth_service: AuthServiceDep,
) -> UserResponse:
    """
    Register a new user.

    Parameters
    ----------
    request : Request
        Current request context.
    user : UserCreate
        Signup payload.
    auth_service : AuthService
        Authentication service dependency.

    Returns
    -------
    UserResponse
        Created user without the password hash.

    Raises
    ------
    DuplicateEntryError
        If the email is already registered.
    """
    db_user = await auth_service.register_user(user)
    return db_user_to_response(db_user)


@router.post(
    "/login",
    response_class=ORJSONResponse,
    response_model=Token,
    summary="Login for access token",
    description="Authenticate with email (sent as `username`) and password to obtain an access token.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                        "token_type": "bearer",
                    },
                },
            },
        },
        401: {
            "description": "Unauthorized",
            "content": {
                "application/json": {"example": {"message": "Invalid email or password"}},
            },
        },
        429: {
            "description": "Rate limit exceeded",
            "content": {"application/json": {"example": {"message": "Rate limit exceeded"}}},
        },
    },
    operation_id="auth_login",
)
@limiter.limit("5/minute")
async def login_for_access_token(
    request: Request,
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    auth_service: AuthServiceDep,
) -> Token:
    """
    Login with email and password.

    Parameters
    ----------
    request : Request
        Current request context.
    form_data : OAuth2PasswordRequestForm
        Form data whose ``username`` holds the email.
    auth_service : AuthService
        Authentication service dependency.

    Returns
    -------
    Token
        Access token object.

    Raises
    ------
    InvalidCredentialsError
        If authentication fails.
    """
    user = await auth_service.authenticate_user(form_data.username, form_data.password)
    return auth_service.create_token_for_user(user)


@router.get(
    "/me",
    response_class=ORJSONResponse,
    response_model=UserResponse,
    summary="Get current user",
    description="Return the profile of the user the bearer token belongs to.",
    responses={
        200: {"content": {"application/json": {"example": USER_EXAMPLE}}},
        401: {
            "description": "Missing or invalid bearer token",
            "content": {"application/json": {"example": {"message": "Invalid token"}}},
        },
    },
    operation_id="auth_me",
)
@limiter.limit("30/minute")
async def read_users_me(request: Request, current_user: UserDBDep) -> UserResponse:
    return db_user_to_response(current_user)
