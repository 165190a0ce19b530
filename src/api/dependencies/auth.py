"""Authentication dependencies for FastAPI."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request

from core.config import get_settings
from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import IAuthProvider, TokenUser


async def get_session_token(request: Request) -> str | None:
    """Read the session token from the header named in the app's settings."""
    settings = getattr(request.app.state, "settings", None) or get_settings()
    return request.headers.get(settings.auth_header_name)


@lru_cache
def get_auth_provider() -> JWTAuthProvider:
    """Get the token provider built from the configured secret."""
    settings = get_settings()
    return JWTAuthProvider(
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.jwt_expire_minutes,
    )


async def get_current_user(
    token: Annotated[str | None, Depends(get_session_token)],
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> TokenUser:
    """
    Dependency to get the current authenticated user.

    Raises:
        AuthenticationError: UNAUTHORIZED if no token was sent,
            INVALID_TOKEN if it failed verification
    """
    if not token:
        raise AuthenticationError(
            message="No token, authorization denied",
            error_code=ErrorCode.UNAUTHORIZED,
        )

    user = auth_provider.validate_token(token)

    if not user:
        raise AuthenticationError(
            message="Token is not valid",
            error_code=ErrorCode.INVALID_TOKEN,
        )

    return user


# Type alias for convenience in route handlers
CurrentUser = Annotated[TokenUser, Depends(get_current_user)]
