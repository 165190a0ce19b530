"""Profile repository protocol."""

from typing import Any, Protocol
from uuid import UUID

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile entities."""

    async def get_by_user(self, user_id: UUID, for_update: bool = False) -> Profile | None:
        """Get the profile owned by a user.

        With ``for_update`` the row stays locked until the transaction ends.
        """
        ...

    async def get_all(self) -> list[Profile]:
        """Get every profile."""
        ...

    async def upsert(self, user_id: UUID, fields: dict[str, Any]) -> Profile:
        """Create the user's profile or overwrite the given fields, atomically."""
        ...

    async def update(self, profile: Profile) -> Profile:
        """Persist the whole profile, embedded lists included."""
        ...

    async def delete_by_user(self, user_id: UUID) -> bool:
        """Delete the profile owned by a user."""
        ...
