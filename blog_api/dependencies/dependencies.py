# blog_api/dependencies/dependencies.py

"""Application dependencies for authentication, repositories and query parsing."""

from dataclasses import dataclass
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Query, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.configs import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from blog_api.db import get_session
from blog_api.errors.auth import InvalidTokenError, MissingTokenError
from blog_api.managers.token_manager import decode_access_token
from blog_api.models import UserDB
from blog_api.repositories import BlogRepository, UserRepository
from blog_api.schemas.blog import BlogSort, BlogState
from blog_api.services import AuthService

# Yields None when the header is missing or not a Bearer scheme
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)
TokenDep = Annotated[str | None, Depends(oauth2_scheme)]


def resolve_user_id(token: str | None, authorization: str | None = None) -> UUID:
    """
    Verify a bearer token and return its subject.

    An Authorization header that carries no usable bearer token (another
    scheme, or an empty token) is an invalid token, not a missing one.
    """
    if not token:
        if authorization:
            raise InvalidTokenError
        raise MissingTokenError
    token_data = decode_access_token(token)
    if not token_data:
        raise InvalidTokenError
    return token_data.user_id


async def get_current_user_id(request: Request, token: TokenDep) -> UUID:
    """
    Resolve the caller's user id from the bearer token.

    Parameters
    ----------
    request : Request
        Current request, used to tell a missing header from a malformed one.
    token : str | None
        Bearer token, None when the header is absent or not a Bearer scheme.

    Returns
    -------
    UUID
        Subject of the verified token.

    Raises
    ------
    MissingTokenError
        If no Authorization header was sent.
    InvalidTokenError
        If the header is not a Bearer token or the token fails verification.
    """
    return resolve_user_id(token, request.headers.get("Authorization"))


CurrentUserIdDep = Annotated[UUID, Depends(get_current_user_id)]


def get_user_repository(session: Annotated[AsyncSession, Depends(get_session)]) -> UserRepository:
    """
    Resolve the `UserRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    UserRepository
        Repository instance bound to the session.
    """
    return UserRepository(session)


UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]


def get_blog_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> BlogRepository:
    """
    Resolve the `BlogRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    BlogRepository
        Repository instance bound to the session.
    """
    return BlogRepository(session)


BlogRepoDep = Annotated[BlogRepository, Depends(get_blog_repository)]


def get_auth_service(repo: UserRepoDep) -> AuthService:
    return AuthService(repo)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


async def get_current_user(user_id: CurrentUserIdDep, repo: UserRepoDep) -> UserDB:
    """
    Load the authenticated user.

    A valid token whose subject no longer exists is treated as invalid.
    """
    user = await repo.get_by_id(user_id)
    if not user:
        raise InvalidTokenError
    return user


UserDBDep = Annotated[UserDB, Depends(get_current_user)]


@dataclass(frozen=True)
class BlogListQuery:
    """
    Query container for blog listing.

    Parameters
    ----------
    page : int
        1-based page number.
    limit : int
        Page size.
    search : str | None
        Case-insensitive substring to look for.
    sort : BlogSort | None
        Sort key, ``-`` prefixed for descending.
    state_filter : BlogState | None
        State to list instead of published.
    """

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_PAGE_SIZE
    search: str | None = None
    sort: BlogSort | None = None
    state_filter: BlogState | None = None


def get_blog_list_query(
    page: Annotated[int, Query(ge=1, description="Page number")] = DEFAULT_PAGE,
    limit: Annotated[
        int,
        Query(ge=1, le=MAX_PAGE_SIZE, description="Maximum number of records to return"),
    ] = DEFAULT_PAGE_SIZE,
    search: Annotated[
        str | None,
        Query(description="Match title, tags or author id"),
    ] = None,
    sort: Annotated[BlogSort | None, Query(description="Sort key")] = None,
    state_filter: Annotated[
        BlogState | None,
        Query(alias="filter", description="List blogs in this state"),
    ] = None,
) -> BlogListQuery:
    """
    Dependency to construct `BlogListQuery` from query parameters.

    Returns
    -------
    BlogListQuery
        Aggregated query parameters object.
    """
    return BlogListQuery(
        page=page,
        limit=limit,
        search=search or None,
        sort=sort,
        state_filter=state_filter,
    )


BlogQueryListDep = Annotated[BlogListQuery, Depends(get_blog_list_query)]
