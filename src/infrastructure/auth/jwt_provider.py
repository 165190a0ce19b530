"""JWT session token provider.

Tokens are HS256-signed with a server-held secret. Payload structure:
    {
        "user": {"id": "user-uuid"},
        "sub": "user-uuid",
        "iat": 1234567000,
        "exp": 1234567890
    }
"""

from datetime import datetime, timedelta
from typing import Any, Optional
from uuid import UUID

import structlog
from jose import JWTError, jwt

from infrastructure.auth.provider import TokenUser

logger = structlog.get_logger()


class JWTAuthProvider:
    """JWT-based session token provider.

    Verification is stateless: the user store is not consulted, so a token
    stays valid until it expires even if its user has been deleted.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int = 60 * 24 * 5,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Verify a token's signature and expiry and extract the identity.

        Args:
            token: The JWT to validate

        Returns:
            TokenUser if valid, None if the signature is bad, the token has
            expired, or the payload does not carry a usable user id
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
            )
        except JWTError as e:
            logger.info("token_rejected", reason=type(e).__name__)
            return None

        return self._identity_from_payload(payload)

    def create_token(self, user_id: UUID) -> str:
        """
        Create a signed session token for a user.

        Args:
            user_id: The user the token asserts

        Returns:
            The generated JWT string
        """
        now = datetime.utcnow()
        payload: dict[str, Any] = {
            "user": {"id": str(user_id)},
            "sub": str(user_id),
            "iat": now,
            "exp": now + timedelta(minutes=self._expire_minutes),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    @staticmethod
    def _identity_from_payload(payload: dict[str, Any]) -> Optional[TokenUser]:
        user_claim = payload.get("user")
        raw_id = user_claim.get("id") if isinstance(user_claim, dict) else None
        raw_id = raw_id or payload.get("sub")
        if not raw_id:
            return None

        try:
            return TokenUser(id=UUID(str(raw_id)))
        except ValueError:
            return None
