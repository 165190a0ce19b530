"""Authentication provider protocol."""

from dataclasses import dataclass
from typing import Optional, Protocol
from uuid import UUID


@dataclass(frozen=True)
class TokenUser:
    """Identity asserted by a verified session token."""

    id: UUID


class IAuthProvider(Protocol):
    """Protocol for session token providers."""

    def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate a session token.

        Args:
            token: The raw token taken from the request header

        Returns:
            TokenUser if valid, None if invalid, expired or malformed
        """
        ...

    def create_token(self, user_id: UUID) -> str:
        """
        Create a session token for a user.

        Args:
            user_id: The user the token asserts

        Returns:
            The signed token string
        """
        ...
