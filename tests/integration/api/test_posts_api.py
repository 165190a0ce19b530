"""Integration tests for Posts API."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from tests.integration.api.helpers import current_user_id, register


async def _create_post(client: AsyncClient, headers: dict[str, str], text: str = "Hello") -> str:
    response = await client.post("/api/posts", json={"text": text}, headers=headers)
    assert response.status_code == 200, response.text
    return str(response.json()["id"])


class TestPostsAPI:
    @pytest.mark.asyncio
    async def test_create_post(self, api_client: AsyncClient) -> None:
        """Test POST /api/posts snapshots the author."""
        headers = await register(api_client, name="Jane Doe")
        user_id = await current_user_id(api_client, headers)

        response = await api_client.post("/api/posts", json={"text": "Hello"}, headers=headers)

        assert response.status_code == 200
        data = response.json()
        assert data["text"] == "Hello"
        assert data["user"] == user_id
        assert data["name"] == "Jane Doe"
        assert data["avatar"].startswith("https://www.gravatar.com/avatar/")
        assert data["likes"] == []
        assert data["comments"] == []

    @pytest.mark.asyncio
    async def test_create_requires_text(self, api_client: AsyncClient) -> None:
        headers = await register(api_client)

        response = await api_client.post("/api/posts", json={}, headers=headers)

        assert response.status_code == 400
        assert response.json()["errors"][0]["param"] == "text"

    @pytest.mark.asyncio
    async def test_list_newest_first(self, api_client: AsyncClient) -> None:
        headers = await register(api_client)
        await _create_post(api_client, headers, "first")
        await _create_post(api_client, headers, "second")

        response = await api_client.get("/api/posts", headers=headers)

        assert response.status_code == 200
        assert [p["text"] for p in response.json()] == ["second", "first"]

    @pytest.mark.asyncio
    async def test_list_requires_token(self, api_client: AsyncClient) -> None:
        response = await api_client.get("/api/posts")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_get_post(self, api_client: AsyncClient) -> None:
        headers = await register(api_client)
        post_id = await _create_post(api_client, headers)

        response = await api_client.get(f"/api/posts/{post_id}", headers=headers)

        assert response.status_code == 200
        assert response.json()["id"] == post_id

    @pytest.mark.asyncio
    async def test_get_unknown_post(self, api_client: AsyncClient) -> None:
        headers = await register(api_client)

        response = await api_client.get(f"/api/posts/{uuid4()}", headers=headers)

        assert response.status_code == 404
        assert response.json()["msg"] == "Post not found"

    @pytest.mark.asyncio
    async def test_get_malformed_id(self, api_client: AsyncClient) -> None:
        headers = await register(api_client)

        response = await api_client.get("/api/posts/12345", headers=headers)

        assert response.status_code == 400
        assert response.json()["msg"] == "Invalid ID"


class TestDeletePostAPI:
    @pytest.mark.asyncio
    async def test_author_deletes(self, api_client: AsyncClient) -> None:
        headers = await register(api_client)
        post_id = await _create_post(api_client, headers)

        response = await api_client.delete(f"/api/posts/{post_id}", headers=headers)

        assert response.status_code == 200
        assert response.json()["msg"] == "Post removed"
        missing = await api_client.get(f"/api/posts/{post_id}", headers=headers)
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_other_user_cannot_delete(self, api_client: AsyncClient) -> None:
        author = await register(api_client)
        other = await register(api_client)
        post_id = await _create_post(api_client, author)

        response = await api_client.delete(f"/api/posts/{post_id}", headers=other)

        assert response.status_code == 401
        assert response.json()["msg"] == "User not authorized"
        still_there = await api_client.get(f"/api/posts/{post_id}", headers=author)
        assert still_there.status_code == 200


class TestLikesAPI:
    @pytest.mark.asyncio
    async def test_like_once(self, api_client: AsyncClient) -> None:
        headers = await register(api_client)
        user_id = await current_user_id(api_client, headers)
        post_id = await _create_post(api_client, headers)

        first = await api_client.put(f"/api/posts/like/{post_id}", headers=headers)
        second = await api_client.put(f"/api/posts/like/{post_id}", headers=headers)

        assert first.status_code == 200
        assert [like["user"] for like in first.json()] == [user_id]
        assert second.status_code == 400
        assert second.json()["msg"] == "Post already liked"

    @pytest.mark.asyncio
    async def test_likes_newest_first(self, api_client: AsyncClient) -> None:
        first_user = await register(api_client)
        second_user = await register(api_client)
        second_id = await current_user_id(api_client, second_user)
        post_id = await _create_post(api_client, first_user)

        await api_client.put(f"/api/posts/like/{post_id}", headers=first_user)
        response = await api_client.put(f"/api/posts/like/{post_id}", headers=second_user)

        assert len(response.json()) == 2
        assert response.json()[0]["user"] == second_id

    @pytest.mark.asyncio
    async def test_unlike(self, api_client: AsyncClient) -> None:
        headers = await register(api_client)
        post_id = await _create_post(api_client, headers)
        await api_client.put(f"/api/posts/like/{post_id}", headers=headers)

        response = await api_client.put(f"/api/posts/unlike/{post_id}", headers=headers)

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_unlike_without_like_leaves_likes(self, api_client: AsyncClient) -> None:
        author = await register(api_client)
        other = await register(api_client)
        post_id = await _create_post(api_client, author)
        await api_client.put(f"/api/posts/like/{post_id}", headers=author)

        response = await api_client.put(f"/api/posts/unlike/{post_id}", headers=other)

        assert response.status_code == 200
        assert len(response.json()) == 1

    @pytest.mark.asyncio
    async def test_like_unknown_post(self, api_client: AsyncClient) -> None:
        headers = await register(api_client)

        response = await api_client.put(f"/api/posts/like/{uuid4()}", headers=headers)

        assert response.status_code == 404


class TestCommentsAPI:
    @pytest.mark.asyncio
    async def test_comments_newest_first(self, api_client: AsyncClient) -> None:
        author = await register(api_client)
        commenter = await register(api_client, name="Commenter")
        post_id = await _create_post(api_client, author)

        await api_client.post(
            f"/api/posts/comment/{post_id}", json={"text": "first"}, headers=commenter
        )
        response = await api_client.post(
            f"/api/posts/comment/{post_id}", json={"text": "second"}, headers=commenter
        )

        assert response.status_code == 200
        comments = response.json()
        assert [c["text"] for c in comments] == ["second", "first"]
        assert comments[0]["name"] == "Commenter"

    @pytest.mark.asyncio
    async def test_comment_requires_text(self, api_client: AsyncClient) -> None:
        headers = await register(api_client)
        post_id = await _create_post(api_client, headers)

        response = await api_client.post(
            f"/api/posts/comment/{post_id}", json={"text": ""}, headers=headers
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_author_of_comment_removes_it(self, api_client: AsyncClient) -> None:
        headers = await register(api_client)
        post_id = await _create_post(api_client, headers)
        added = await api_client.post(
            f"/api/posts/comment/{post_id}", json={"text": "oops"}, headers=headers
        )
        comment_id = added.json()[0]["id"]

        response = await api_client.delete(
            f"/api/posts/comment/{post_id}/{comment_id}", headers=headers
        )

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_post_author_cannot_remove_others_comment(
        self, api_client: AsyncClient
    ) -> None:
        author = await register(api_client)
        commenter = await register(api_client)
        post_id = await _create_post(api_client, author)
        added = await api_client.post(
            f"/api/posts/comment/{post_id}", json={"text": "mine"}, headers=commenter
        )
        comment_id = added.json()[0]["id"]

        response = await api_client.delete(
            f"/api/posts/comment/{post_id}/{comment_id}", headers=author
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_remove_unknown_comment(self, api_client: AsyncClient) -> None:
        headers = await register(api_client)
        post_id = await _create_post(api_client, headers)

        response = await api_client.delete(
            f"/api/posts/comment/{post_id}/{uuid4()}", headers=headers
        )

        assert response.status_code == 404
        assert response.json()["msg"] == "Comment does not exist"
