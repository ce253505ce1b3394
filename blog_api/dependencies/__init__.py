# blog_api/dependencies/__init__.py

from blog_api.dependencies.dependencies import (
    AuthServiceDep,
    BlogListQuery,
    BlogQueryListDep,
    BlogRepoDep,
    CurrentUserIdDep,
    TokenDep,
    UserDBDep,
    UserRepoDep,
    get_auth_service,
    get_blog_repository,
    get_current_user,
    get_current_user_id,
    get_user_repository,
    oauth2_scheme,
    resolve_user_id,
)

__all__ = [
    "AuthServiceDep",
    "BlogListQuery",
    "BlogQueryListDep",
    "BlogRepoDep",
    "CurrentUserIdDep",
    "TokenDep",
    "UserDBDep",
    "UserRepoDep",
    "get_auth_service",
    "get_blog_repository",
    "get_current_user",
    "get_current_user_id",
    "get_user_repository",
    "oauth2_scheme",
    "resolve_user_id",
]
