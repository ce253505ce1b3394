# tests/routes/test_blog_routes.py
"""Tests for the blog routes with mocked repositories."""

from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from fastapi import status
from httpx import AsyncClient

from blog_api.configs import settings
from blog_api.models import BlogDB, UserDB
from blog_api.repositories import BlogQuery
from blog_api.schemas import BlogSort, BlogState, BlogUpdate

pytestmark = pytest.mark.usefixtures("override_repos")


class TestListBlogs:
    """Tests for GET /api/blogs."""

    @pytest.mark.asyncio
    async def test_list_defaults(
        self,
        client: AsyncClient,
        mock_blog_repo: MagicMock,
        sample_blog: BlogDB,
    ) -> None:
        response = await client.get("/api/blogs")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["totalPages"] == 1
        assert data["currentPage"] == 1
        assert data["blogs"][0]["id"] == str(sample_blog.id)
        assert data["blogs"][0]["author"] == {
            "first_name": "Test",
            "last_name": "User",
            "email": "test@example.com",
        }
        mock_blog_repo.list.assert_awaited_once_with(BlogQuery(page=1, limit=20))

    @pytest.mark.asyncio
    async def test_list_passes_query_parameters(
        self,
        client: AsyncClient,
        mock_blog_repo: MagicMock,
    ) -> None:
        response = await client.get(
            "/api/blogs",
            params={"page": 2, "limit": 5, "search": "lisbon", "sort": "-read_count"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["currentPage"] == 2
        mock_blog_repo.list.assert_awaited_once_with(
            BlogQuery(
                page=2,
                limit=5,
                search="lisbon",
                sort=BlogSort.READ_COUNT_DESC,
                state=BlogState.PUBLISHED,
            ),
        )

    @pytest.mark.asyncio
    async def test_filter_lists_drafts(
        self,
        client: AsyncClient,
        mock_blog_repo: MagicMock,
    ) -> None:
        response = await client.get("/api/blogs", params={"filter": "draft"})

        assert response.status_code == status.HTTP_200_OK
        query = mock_blog_repo.list.await_args.args[0]
        assert query.state == BlogState.DRAFT
        assert query.author_id is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "params",
        [
            {"filter": "archived"},
            {"sort": "password"},
            {"page": 0},
            {"limit": 0},
            {"limit": 101},
        ],
    )
    async def test_invalid_query_is_rejected(
        self,
        client: AsyncClient,
        mock_blog_repo: MagicMock,
        params: dict[str, object],
    ) -> None:
        response = await client.get("/api/blogs", params=params)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
        assert response.json()["message"] == "Validation failed"
        mock_blog_repo.list.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_listing_ignores_bad_token(self, client: AsyncClient) -> None:
        response = await client.get("/api/blogs", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == status.HTTP_200_OK

    @pytest.mark.asyncio
    async def test_private_filter_requires_token(
        self,
        client: AsyncClient,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr(settings, "PUBLIC_STATE_FILTER", False)

        response = await client.get("/api/blogs", params={"filter": "draft"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"message": "No token provided"}

    @pytest.mark.asyncio
    async def test_private_filter_scopes_to_caller(
        self,
        client: AsyncClient,
        monkeypatch: pytest.MonkeyPatch,
        mock_blog_repo: MagicMock,
        auth_headers: dict[str, str],
        sample_user: UserDB,
    ) -> None:
        monkeypatch.setattr(settings, "PUBLIC_STATE_FILTER", False)

        response = await client.get(
            "/api/blogs",
            params={"filter": "draft"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        query = mock_blog_repo.list.await_args.args[0]
        assert query.author_id == sample_user.uuid


class TestGetBlog:
    """Tests for GET /api/blogs/{blog_id}."""

    @pytest.mark.asyncio
    async def test_get_published(
        self,
        client: AsyncClient,
        mock_blog_repo: MagicMock,
        sample_blog: BlogDB,
    ) -> None:
        response = await client.get(f"/api/blogs/{sample_blog.id}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["read_count"] == 3
        assert data["author"]["email"] == "test@example.com"
        assert data["updated_at"] == "No updates"
        mock_blog_repo.read_published.assert_awaited_once_with(sample_blog.id)

    @pytest.mark.asyncio
    async def test_get_missing_or_draft(
        self,
        client: AsyncClient,
        mock_blog_repo: MagicMock,
    ) -> None:
        mock_blog_repo.read_published.return_value = None

        response = await client.get(f"/api/blogs/{uuid4()}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"message": "Blog not found"}

    @pytest.mark.asyncio
    async def test_unrenderable_row_is_json_server_error(
        self,
        client: AsyncClient,
        sample_blog: BlogDB,
    ) -> None:
        sample_blog.state = "archived"

        response = await client.get(f"/api/blogs/{sample_blog.id}")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"error": "Internal Server Error"}

    @pytest.mark.asyncio
    async def test_get_malformed_id(self, client: AsyncClient) -> None:
        response = await client.get("/api/blogs/not-a-uuid")

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT


class TestCreateBlog:
    """Tests for POST /api/blogs."""

    payload = {"title": "Fresh post", "tags": ["new"], "body": "Some words here"}

    @pytest.mark.asyncio
    async def test_create_requires_token(
        self,
        client: AsyncClient,
        mock_blog_repo: MagicMock,
    ) -> None:
        response = await client.post("/api/blogs", json=self.payload)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"message": "No token provided"}
        mock_blog_repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_rejects_non_bearer_scheme(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/blogs",
            json=self.payload,
            headers={"Authorization": "Basic dXNlcjpwYXNz"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"message": "Invalid token"}

    @pytest.mark.asyncio
    async def test_create_rejects_invalid_token(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/blogs",
            json=self.payload,
            headers={"Authorization": "Bearer not.a.jwt"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"message": "Invalid token"}

    @pytest.mark.asyncio
    async def test_create_uses_token_subject_as_author(
        self,
        client: AsyncClient,
        mock_blog_repo: MagicMock,
        auth_headers: dict[str, str],
        sample_user: UserDB,
    ) -> None:
        response = await client.post(
            "/api/blogs",
            json={**self.payload, "author_id": str(uuid4())},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        mock_blog_repo.create.assert_awaited_once()
        assert mock_blog_repo.create.await_args.kwargs["author_id"] == sample_user.uuid

    @pytest.mark.asyncio
    async def test_create_with_unknown_author(
        self,
        client: AsyncClient,
        mock_blog_repo: MagicMock,
        mock_user_repo: MagicMock,
        auth_headers: dict[str, str],
    ) -> None:
        mock_user_repo.get_by_id.return_value = None

        response = await client.post("/api/blogs", json=self.payload, headers=auth_headers)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"message": "Invalid token"}
        mock_blog_repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_requires_title_and_body(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
    ) -> None:
        response = await client.post("/api/blogs", json={"tags": []}, headers=auth_headers)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
        fields = {error["field"] for error in response.json()["errors"]}
        assert {"title", "body"} <= fields


class TestUpdateState:
    """Tests for PATCH /api/blogs/{blog_id}/state."""

    @pytest.mark.asyncio
    async def test_owner_can_publish(
        self,
        client: AsyncClient,
        mock_blog_repo: MagicMock,
        sample_blog: BlogDB,
        auth_headers: dict[str, str],
    ) -> None:
        response = await client.patch(
            f"/api/blogs/{sample_blog.id}/state",
            json={"state": "published"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        mock_blog_repo.set_state.assert_awaited_once_with(sample_blog.id, BlogState.PUBLISHED)

    @pytest.mark.asyncio
    async def test_non_owner_is_forbidden(
        self,
        client: AsyncClient,
        mock_blog_repo: MagicMock,
        sample_blog: BlogDB,
        other_auth_headers: dict[str, str],
    ) -> None:
        response = await client.patch(
            f"/api/blogs/{sample_blog.id}/state",
            json={"state": "draft"},
            headers=other_auth_headers,
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json() == {"message": "You do not have permission to update this blog"}
        mock_blog_repo.set_state.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_blog_is_not_found_before_ownership(
        self,
        client: AsyncClient,
        mock_blog_repo: MagicMock,
        other_auth_headers: dict[str, str],
    ) -> None:
        mock_blog_repo.get_by_id.return_value = None

        response = await client.patch(
            f"/api/blogs/{uuid4()}/state",
            json={"state": "published"},
            headers=other_auth_headers,
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"message": "Blog not found"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [{"state": "archived"}, {"state": "published", "read_count": 99}, {}],
    )
    async def test_invalid_state_body(
        self,
        client: AsyncClient,
        mock_blog_repo: MagicMock,
        sample_blog: BlogDB,
        auth_headers: dict[str, str],
        body: dict[str, object],
    ) -> None:
        response = await client.patch(
            f"/api/blogs/{sample_blog.id}/state",
            json=body,
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
        mock_blog_repo.set_state.assert_not_awaited()


class TestEditBlog:
    """Tests for PATCH /api/blogs/{blog_id}."""

    @pytest.mark.asyncio
    async def test_owner_can_edit(
        self,
        client: AsyncClient,
        mock_blog_repo: MagicMock,
        sample_blog: BlogDB,
        auth_headers: dict[str, str],
    ) -> None:
        response = await client.patch(
            f"/api/blogs/{sample_blog.id}",
            json={"title": "Renamed"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        mock_blog_repo.update.assert_awaited_once_with(sample_blog.id, BlogUpdate(title="Renamed"))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["author_id", "read_count", "state", "reading_time"])
    async def test_protected_fields_are_rejected(
        self,
        client: AsyncClient,
        mock_blog_repo: MagicMock,
        sample_blog: BlogDB,
        auth_headers: dict[str, str],
        field: str,
    ) -> None:
        response = await client.patch(
            f"/api/blogs/{sample_blog.id}",
            json={"title": "Renamed", field: "x"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
        mock_blog_repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_non_owner_is_forbidden(
        self,
        client: AsyncClient,
        mock_blog_repo: MagicMock,
        sample_blog: BlogDB,
        other_auth_headers: dict[str, str],
    ) -> None:
        response = await client.patch(
            f"/api/blogs/{sample_blog.id}",
            json={"title": "Mine now"},
            headers=other_auth_headers,
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        mock_blog_repo.update.assert_not_awaited()


class TestDeleteBlog:
    """Tests for DELETE /api/blogs/{blog_id}."""

    @pytest.mark.asyncio
    async def test_owner_can_delete(
        self,
        client: AsyncClient,
        mock_blog_repo: MagicMock,
        sample_blog: BlogDB,
        auth_headers: dict[str, str],
    ) -> None:
        response = await client.delete(f"/api/blogs/{sample_blog.id}", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "Blog deleted successfully"}
        mock_blog_repo.delete.assert_awaited_once_with(sample_blog.id)

    @pytest.mark.asyncio
    async def test_non_owner_is_forbidden(
        self,
        client: AsyncClient,
        mock_blog_repo: MagicMock,
        sample_blog: BlogDB,
        other_auth_headers: dict[str, str],
    ) -> None:
        response = await client.delete(f"/api/blogs/{sample_blog.id}", headers=other_auth_headers)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json() == {"message": "You do not have permission to delete this blog"}
        mock_blog_repo.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_blog(
        self,
        client: AsyncClient,
        mock_blog_repo: MagicMock,
        auth_headers: dict[str, str],
    ) -> None:
        mock_blog_repo.get_by_id.return_value = None

        response = await client.delete(f"/api/blogs/{uuid4()}", headers=auth_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_delete_requires_token(self, client: AsyncClient, sample_blog: BlogDB) -> None:
        response = await client.delete(f"/api/blogs/{sample_blog.id}")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"message": "No token provided"}
