"""User registration routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.services import get_auth_service
from api.schemas.user import TokenResponse, UserRegister
from core.rate_limit import limiter
from domain.services.auth_service import AuthService

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=TokenResponse,
    summary="Register a user",
    responses={
        200: {"description": "User created, session token issued"},
        400: {"description": "Invalid input or email already registered"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def register_user(
    request: Request,
    body: UserRegister,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Register a new user and return a session token for it."""
    token = await service.register(
        name=body.name,
        email=body.email,
        password=body.password,
    )
    return TokenResponse(token=token)
