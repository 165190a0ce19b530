"""Profile API routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.dependencies.ids import parse_object_id
from api.dependencies.services import get_profile_service
from api.schemas.common import MessageResponse
from api.schemas.profile import (
    EducationCreate,
    EducationResponse,
    ExperienceCreate,
    ExperienceResponse,
    ProfileOwner,
    ProfileResponse,
    ProfileUpsert,
)
from core.rate_limit import limiter
from domain.entities.profile import SOCIAL_PLATFORMS, Education, Experience, Profile
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get(
    "/me",
    response_model=ProfileResponse,
    summary="Get the caller's profile",
    responses={400: {"description": "The caller has no profile"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Get the authenticated user's profile."""
    profile = await service.get_for_user(user.id)
    return _build_profile_response(profile)


@router.post(
    "",
    response_model=ProfileResponse,
    summary="Create or update the caller's profile",
    responses={400: {"description": "Status or skills missing"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def upsert_profile(
    request: Request,
    body: ProfileUpsert,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """
    Create the caller's profile, or update the fields that were sent.

    Social links are sent as top-level fields (`youtube`, `twitter`, ...) and
    stored together; `skills` may be a comma-separated string.
    """
    sent = body.model_dump(exclude_unset=True)
    fields = {k: v for k, v in sent.items() if k not in SOCIAL_PLATFORMS}
    fields["social"] = {k: v for k, v in sent.items() if k in SOCIAL_PLATFORMS}

    profile = await service.upsert(user.id, fields)
    return _build_profile_response(profile)


@router.get(
    "",
    response_model=list[ProfileResponse],
    summary="List all profiles",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_profiles(
    request: Request,
    service: ProfileService = Depends(get_profile_service),
) -> list[ProfileResponse]:
    """Get every profile with its owner's name and avatar."""
    profiles = await service.get_all()
    return [_build_profile_response(profile) for profile in profiles]


@router.get(
    "/user/{user_id}",
    response_model=ProfileResponse,
    summary="Get a profile by user ID",
    responses={400: {"description": "Malformed ID or profile not found"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_profile_by_user(
    request: Request,
    user_id: str,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Get a user's public profile."""
    profile = await service.get_by_user_id(parse_object_id(user_id))
    return _build_profile_response(profile)


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Delete the caller's account",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_account(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> MessageResponse:
    """Delete the caller's posts, profile and user."""
    await service.delete_account(user.id)
    return MessageResponse(msg="User deleted")


@router.put(
    "/experience",
    response_model=ProfileResponse,
    summary="Add an experience entry",
    responses={400: {"description": "Invalid entry or no profile"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def add_experience(
    request: Request,
    body: ExperienceCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Add an experience entry to the top of the caller's list."""
    entry = Experience(
        title=body.title,
        company=body.company,
        from_date=body.from_date,
        to_date=body.to_date,
        role=body.role,
        director=body.director,
        location=body.location,
        current=body.current,
        description=body.description,
    )
    profile = await service.add_experience(user.id, entry)
    return _build_profile_response(profile)


@router.delete(
    "/experience/{exp_id}",
    response_model=ProfileResponse,
    summary="Remove an experience entry",
    responses={404: {"description": "Entry not found"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def remove_experience(
    request: Request,
    exp_id: str,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Remove an experience entry from the caller's profile."""
    profile = await service.remove_experience(user.id, parse_object_id(exp_id))
    return _build_profile_response(profile)


@router.put(
    "/education",
    response_model=ProfileResponse,
    summary="Add an education entry",
    responses={400: {"description": "Invalid entry or no profile"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def add_education(
    request: Request,
    body: EducationCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Add an education entry to the top of the caller's list."""
    entry = Education(
        school=body.school,
        degree=body.degree,
        field_of_study=body.field_of_study,
        from_date=body.from_date,
        to_date=body.to_date,
        current=body.current,
        description=body.description,
    )
    profile = await service.add_education(user.id, entry)
    return _build_profile_response(profile)


@router.delete(
    "/education/{edu_id}",
    response_model=ProfileResponse,
    summary="Remove an education entry",
    responses={404: {"description": "Entry not found"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def remove_education(
    request: Request,
    edu_id: str,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Remove an education entry from the caller's profile."""
    profile = await service.remove_education(user.id, parse_object_id(edu_id))
    return _build_profile_response(profile)


def _build_profile_response(profile: Profile) -> ProfileResponse:
    """Build a ProfileResponse from a domain Profile."""
    return ProfileResponse(
        id=profile.id,
        user=ProfileOwner(
            id=profile.user_id,
            name=profile.user_name,
            avatar=profile.user_avatar,
        ),
        status=profile.status,
        skills=profile.skills,
        company=profile.company,
        location=profile.location,
        website=profile.website,
        bio=profile.bio,
        spotlight_pin=profile.spotlight_pin,
        social=profile.social,
        experience=[
            ExperienceResponse(
                id=exp.id,
                title=exp.title,
                company=exp.company,
                from_date=exp.from_date,
                to_date=exp.to_date,
                role=exp.role,
                director=exp.director,
                location=exp.location,
                current=exp.current,
                description=exp.description,
            )
            for exp in profile.experience
        ],
        education=[
            EducationResponse(
                id=edu.id,
                school=edu.school,
                degree=edu.degree,
                field_of_study=edu.field_of_study,
                from_date=edu.from_date,
                to_date=edu.to_date,
                current=edu.current,
                description=edu.description,
            )
            for edu in profile.education
        ],
        created_at=profile.created_at,
        updated_at=profile.updated_at,
    )
