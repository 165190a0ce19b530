"""Shared helpers for API integration tests."""

from uuid import uuid4

from httpx import AsyncClient

AUTH_HEADER = "x-auth-token"


async def register(
    client: AsyncClient,
    name: str = "Test User",
    email: str | None = None,
    password: str = "secret123",
) -> dict[str, str]:
    """Register a user and return auth headers carrying its token."""
    response = await client.post(
        "/api/users",
        json={
            "name": name,
            "email": email or f"user-{uuid4().hex[:8]}@example.com",
            "password": password,
        },
    )
    assert response.status_code == 200, response.text
    return {AUTH_HEADER: response.json()["token"]}


async def current_user_id(client: AsyncClient, headers: dict[str, str]) -> str:
    """Resolve the user ID behind a set of auth headers."""
    response = await client.get("/api/auth", headers=headers)
    assert response.status_code == 200, response.text
    return str(response.json()["id"])
