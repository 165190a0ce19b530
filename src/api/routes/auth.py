"""Session routes: current identity and login."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_auth_service
from api.schemas.user import LoginRequest, TokenResponse, UserResponse
from core.rate_limit import limiter
from domain.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get(
    "",
    response_model=UserResponse,
    summary="Get the authenticated user",
    responses={
        401: {"description": "Missing or invalid token"},
        404: {"description": "User no longer exists"},
    },
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_authenticated_user(
    request: Request,
    user: CurrentUser,
    service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    """Return the public fields of the user the token belongs to."""
    account = await service.get_account(user.id)
    return UserResponse(
        id=account.id,
        name=account.name,
        email=account.email,
        avatar=account.avatar,
        created_at=account.created_at,
    )


@router.post(
    "",
    response_model=TokenResponse,
    summary="Log in",
    responses={
        400: {"description": "Invalid credentials"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def login(
    request: Request,
    body: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Exchange email and password for a session token."""
    token = await service.authenticate(body.email, body.password)
    return TokenResponse(token=token)
