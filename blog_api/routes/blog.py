# blog_api/routes/blog.py

"""
Blog Routes.

Provides the listing/search endpoint, single-post reads and the
ownership-gated mutation endpoints for blogs.

Summary
-------
Endpoints include:
  - List published blogs (search, filter, sort, pagination)
  - Read a published blog (counts the read)
  - Create blog
  - Change blog state
  - Edit blog
  - Delete blog

Ownership
---------
Mutations load the blog before checking the author, so a missing blog is a
``404`` and someone else's blog is a ``403``.

Rate Limiting
-------------
All endpoints define explicit limits and include `429` response examples. Tiered
limits apply when `X-API-Key` is present, offering higher throughput for
identified clients.
"""

from logging import getLogger
from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Body, Request
from fastapi.responses import ORJSONResponse
from pydantic import ValidationError
from starlette.status import HTTP_201_CREATED

from blog_api.configs import file_logger, settings
from blog_api.dependencies import (
    BlogQueryListDep,
    BlogRepoDep,
    CurrentUserIdDep,
    TokenDep,
    UserRepoDep,
    resolve_user_id,
)
from blog_api.errors.auth import InvalidTokenError
from blog_api.errors.blog import BlogForbiddenError, BlogNotFoundError, BlogResponseError
from blog_api.managers import limiter
from blog_api.models import BlogDB, UserDB
from blog_api.repositories import BlogQuery, BlogRepository
from blog_api.schemas import (
    AuthorSummary,
    BlogCreate,
    BlogListResponse,
    BlogResponse,
    BlogState,
    BlogStateUpdate,
    BlogUpdate,
    MessageResponse,
)
from blog_api.utils import response_datetime

router = APIRouter(prefix="/api/blogs", tags=["📝 Blogs"])

logger = file_logger(getLogger(__name__))

BLOG_EXAMPLE: dict[str, Any] = {
    "id": "550e8400-e29b-41d4-a716-446655440000",
    "title": "A Week in Lisbon",
    "description": "Trams, tiles and pastel de nata",
    "tags": ["travel", "portugal"],
    "body": "Lisbon is a city of hills...",
    "state": "published",
    "author_id": "123e4567-e89b-12d3-a456-426614174000",
    "author": {"first_name": "Ada", "last_name": "Lovelace", "email": "ada@example.com"},
    "read_count": 12,
    "reading_time": 1,
    "created_at": "2025-01-01 09:30:00",
    "updated_at": "No updates",
}

UNAUTHORIZED_RESPONSE: dict[int | str, dict[str, Any]] = {
    401: {
        "description": "Missing or invalid bearer token",
        "content": {"application/json": {"example": {"message": "No token provided"}}},
    },
}
NOT_FOUND_RESPONSE: dict[int | str, dict[str, Any]] = {
    404: {
        "description": "Blog not found",
        "content": {"application/json": {"example": {"message": "Blog not found"}}},
    },
}
RATE_LIMIT_RESPONSE: dict[int | str, dict[str, Any]] = {
    429: {
        "description": "Rate limit exceeded",
        "content": {"application/json": {"example": {"message": "Rate limit exceeded"}}},
    },
}


def forbidden_response(action: str) -> dict[int | str, dict[str, Any]]:
    return {
        403: {
            "description": "Caller is not the author",
            "content": {
                "application/json": {
                    "example": {"message": f"You do not have permission to {action} this blog"},
                },
            },
        },
    }


def db_blog_to_response(db_blog: BlogDB, author: UserDB | None = None) -> BlogResponse:
    """
    Convert a `BlogDB` instance to `BlogResponse` with datetime serialization.

    Parameters
    ----------
    db_blog : BlogDB
        Database blog entity.
    author : UserDB | None
        Author row to embed, if loaded.

    Returns
    -------
    BlogResponse
        Validated response model.
    """
    blog_dict = response_datetime(db_blog)
    blog_dict["author"] = AuthorSummary.model_validate(author) if author else None

    try:
        response = BlogResponse.model_validate(blog_dict)
    except ValidationError as e:
        logger.exception("Validation error converting blog to response model")
        mssg = f"Validation error converting blog {db_blog.id} to response model"
        raise BlogResponseError(mssg) from e

    return response


async def get_owned_blog(
    repo: BlogRepository,
    blog_id: UUID,
    user_id: UUID,
    action: str,
) -> BlogDB:
    """
    Load a blog and check that the caller wrote it.

    Raises
    ------
    BlogNotFoundError
        If the blog does not exist.
    BlogForbiddenError
        If the caller is not the author.
    """
    blog = await repo.get_by_id(blog_id)
    if not blog:
        raise BlogNotFoundError
    if blog.author_id != user_id:
        logger.warning(f"User {user_id} tried to {action} blog {blog_id}")
        raise BlogForbiddenError(action)
    return blog


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=BlogListResponse,
    summary="List blogs",
    description=(
        "List published blogs with optional search, sort and pagination. "
        "`filter` lists blogs in another state instead."
    ),
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {"blogs": [BLOG_EXAMPLE], "totalPages": 1, "currentPage": 1},
                },
            },
        },
        **RATE_LIMIT_RESPONSE,
    },
    operation_id="blogs_list",
)
@limiter.limit(lambda key: "120/minute" if "apikey" in key else "60/minute")
async def list_blogs(
    request: Request,
    query: BlogQueryListDep,
    repo: BlogRepoDep,
    token: TokenDep,
) -> BlogListResponse:
    """
    List blogs.

    Parameters
    ----------
    request : Request
        Current request context.
    query : BlogListQuery
        Page, limit, search, sort and filter parameters.
    repo : BlogRepository
        Repository dependency.
    token : str | None
        Bearer token, only verified when listing non-published blogs
        requires an owner.

    Returns
    -------
    BlogListResponse
        One page of blogs with page counts.
    """
    state = query.state_filter or BlogState.PUBLISHED
    author_id: UUID | None = None
    if state != BlogState.PUBLISHED and not settings.PUBLIC_STATE_FILTER:
        author_id = resolve_user_id(token, request.headers.get("Authorization"))

    items, total_pages = await repo.list(
        BlogQuery(
            page=query.page,
            limit=query.limit,
            search=query.search,
            sort=query.sort,
            state=state,
            author_id=author_id,
        ),
    )

    return BlogListResponse(
        blogs=[db_blog_to_response(blog, author) for blog, author in items],
        total_pages=total_pages,
        current_page=query.page,
    )


@router.get(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    summary="Read a published blog",
    description="Get a published blog by ID. Each successful read increments its read count.",
    responses={
        200: {"content": {"application/json": {"example": BLOG_EXAMPLE}}},
        **NOT_FOUND_RESPONSE,
        **RATE_LIMIT_RESPONSE,
    },
    operation_id="blogs_get",
)
@limiter.limit(lambda key: "120/minute" if "apikey" in key else "60/minute")
async def get_blog(request: Request, blog_id: UUID, repo: BlogRepoDep) -> BlogResponse:
    """
    Read a published blog.

    Parameters
    ----------
    request : Request
        Current request context.
    blog_id : UUID
        Blog identifier.
    repo : BlogRepository
        Repository dependency.

    Returns
    -------
    BlogResponse
        Blog with its post-increment read count.

    Raises
    ------
    BlogNotFoundError
        If the blog is missing or still a draft.
    """
    found = await repo.read_published(blog_id)
    if not found:
        raise BlogNotFoundError

    blog, author = found
    return db_blog_to_response(blog, author)


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a new blog post",
    description="Create a blog authored by the caller. New blogs start in the configured default state.",
    responses={
        201: {"content": {"application/json": {"example": {**BLOG_EXAMPLE, "state": "draft"}}}},
        **UNAUTHORIZED_RESPONSE,
        **RATE_LIMIT_RESPONSE,
    },
    operation_id="blogs_create",
)
@limiter.limit(lambda key: "30/minute" if "apikey" in key else "10/minute")
async def create_blog(
    request: Request,
    blog: Annotated[
        BlogCreate,
        Body(
            examples=[
                {
                    "title": "A Week in Lisbon",
                    "description": "Trams, tiles and pastel de nata",
                    "tags": ["travel", "portugal"],
                    "body": "Lisbon is a city of hills...",
                },
            ],
        ),
    ],
    user_id: CurrentUserIdDep,
    repo: BlogRepoDep,
    user_repo: UserRepoDep,
) -> BlogResponse:
    """
    Create a new blog post.

    Parameters
    ----------
    request : Request
        Current request context.
    blog : BlogCreate
        Blog payload.
    user_id : UUID
        Authenticated caller, recorded as the author.
    repo : BlogRepository
        Repository dependency.
    user_repo : UserRepository
        Used to resolve the author.

    Returns
    -------
    BlogResponse
        Created blog.

    Raises
    ------
    InvalidTokenError
        If the token's subject is not a registered user.
    """
    author = await user_repo.get_by_id(user_id)
    if not author:
        raise InvalidTokenError

    db_blog = await repo.create(blog, author_id=user_id)
    logger.info(f"Blog {db_blog.id} created by {user_id}")
    return db_blog_to_response(db_blog, author)


@router.patch(
    "/{blog_id}/state",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    summary="Change blog state",
    description="Publish or unpublish a blog. Only the author may do this.",
    responses={
        200: {"content": {"application/json": {"example": {**BLOG_EXAMPLE, "author": None}}}},
        **UNAUTHORIZED_RESPONSE,
        **forbidden_response("update"),
        **NOT_FOUND_RESPONSE,
        **RATE_LIMIT_RESPONSE,
    },
    operation_id="blogs_update_state",
)
@limiter.limit(lambda key: "30/minute" if "apikey" in key else "10/minute")
async def update_blog_state(
    request: Request,
    blog_id: UUID,
    payload: BlogStateUpdate,
    user_id: CurrentUserIdDep,
    repo: BlogRepoDep,
) -> BlogResponse:
    """
    Change the state of a blog.

    Parameters
    ----------
    request : Request
        Current request context.
    blog_id : UUID
        Blog identifier.
    payload : BlogStateUpdate
        New state.
    user_id : UUID
        Authenticated caller.
    repo : BlogRepository
        Repository dependency.

    Returns
    -------
    BlogResponse
        Updated blog.
    """
    await get_owned_blog(repo, blog_id, user_id, "update")

    updated = await repo.set_state(blog_id, payload.state)
    if not updated:
        raise BlogNotFoundError

    logger.info(f"Blog {blog_id} state set to {payload.state}")
    return db_blog_to_response(updated)


@router.patch(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    summary="Edit a blog",
    description=(
        "Edit the title, description, tags or body of a blog. Reading time is "
        "recomputed from the resulting body. Only the author may do this."
    ),
    responses={
        200: {"content": {"application/json": {"example": {**BLOG_EXAMPLE, "author": None}}}},
        **UNAUTHORIZED_RESPONSE,
        **forbidden_response("update"),
        **NOT_FOUND_RESPONSE,
        **RATE_LIMIT_RESPONSE,
    },
    operation_id="blogs_update",
)
@limiter.limit(lambda key: "30/minute" if "apikey" in key else "10/minute")
async def update_blog(
    request: Request,
    blog_id: UUID,
    blog: BlogUpdate,
    user_id: CurrentUserIdDep,
    repo: BlogRepoDep,
) -> BlogResponse:
    """
    Edit a blog.

    Parameters
    ----------
    request : Request
        Current request context.
    blog_id : UUID
        Blog identifier.
    blog : BlogUpdate
        Fields to change.
    user_id : UUID
        Authenticated caller.
    repo : BlogRepository
        Repository dependency.

    Returns
    -------
    BlogResponse
        Updated blog.
    """
    await get_owned_blog(repo, blog_id, user_id, "update")

    updated = await repo.update(blog_id, blog)
    if not updated:
        raise BlogNotFoundError

    logger.info(f"Blog {blog_id} updated")
    return db_blog_to_response(updated)


@router.delete(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Delete a blog",
    description="Permanently delete a blog. Only the author may do this.",
    responses={
        200: {
            "content": {"application/json": {"example": {"message": "Blog deleted successfully"}}},
        },
        **UNAUTHORIZED_RESPONSE,
        **forbidden_response("delete"),
        **NOT_FOUND_RESPONSE,
        **RATE_LIMIT_RESPONSE,
    },
    operation_id="blogs_delete",
)
@limiter.limit(lambda key: "30/minute" if "apikey" in key else "10/minute")
async def delete_blog(
    request: Request,
    blog_id: UUID,
    user_id: CurrentUserIdDep,
    repo: BlogRepoDep,
) -> MessageResponse:
    """
    Delete blog by ID.

    Parameters
    ----------
    request : Request
        Current request context.
    blog_id : UUID
        Blog identifier.
    user_id : UUID
        Authenticated caller.
    repo : BlogRepository
        Repository dependency.

    Returns
    -------
    MessageResponse
        Confirmation message.
    """
    await get_owned_blog(repo, blog_id, user_id, "delete")

    if not await repo.delete(blog_id):
        raise BlogNotFoundError

    logger.info(f"Blog {blog_id} deleted by {user_id}")
    return MessageResponse(message="Blog deleted successfully")
