"""Profile service layer: upsert, reads, embedded list mutators, account deletion."""

from collections.abc import Callable, Sequence
from typing import Any
from uuid import UUID

import structlog

from core.exceptions import (
    EducationNotFoundError,
    ExperienceNotFoundError,
    ProfileNotFoundError,
    UserNotFoundError,
    ValidationFailedError,
)
from domain.entities.profile import SOCIAL_PLATFORMS, Education, Experience, Profile
from domain.normalize import normalize_url, split_skills
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

NO_PROFILE_MESSAGE = "There is no profile for this user"

# Plain-text fields copied through to the profile when supplied
_TEXT_FIELDS = ("company", "location", "bio", "spotlight_pin")


class ProfileService:
    """Service layer for Profile business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_for_user(self, user_id: UUID) -> Profile:
        """Get the caller's own profile."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            if not profile:
                raise ProfileNotFoundError(NO_PROFILE_MESSAGE)
            await self._attach_owners(uow, [profile])
            return profile

    async def get_by_user_id(self, user_id: UUID) -> Profile:
        """Get any user's public profile."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            if not profile:
                raise ProfileNotFoundError()
            await self._attach_owners(uow, [profile])
            return profile

    async def get_all(self) -> list[Profile]:
        """Get every profile with its owner's name and avatar."""
        async with self._uow_factory() as uow:
            profiles = await uow.profiles.get_all()
            await self._attach_owners(uow, profiles)
            return profiles

    async def upsert(self, user_id: UUID, fields: dict[str, Any]) -> Profile:
        """Create the user's profile, or overwrite the supplied fields.

        ``fields`` holds only what the caller sent. ``status`` and ``skills``
        are required; ``skills`` may be a comma-separated string. The website
        and social links are stored in canonical https form.
        """
        values = self._build_profile_fields(fields)

        async with self._uow_factory() as uow:
            if not await uow.users.get(user_id):
                raise UserNotFoundError(str(user_id))
            profile = await uow.profiles.upsert(user_id, values)
            await uow.commit()
            await self._attach_owners(uow, [profile])

        logger.info("profile_upserted", user_id=str(user_id), profile_id=str(profile.id))
        return profile

    async def add_experience(self, user_id: UUID, entry: Experience) -> Profile:
        """Prepend an experience entry to the caller's profile."""
        _check_date_order(entry.from_date, entry.to_date)
        if not entry.title.strip():
            raise ValidationFailedError("Title is required", field="title")
        if not entry.company.strip():
            raise ValidationFailedError("Company is required", field="company")

        async with self._uow_factory() as uow:
            profile = await self._lock_profile(uow, user_id)
            profile.add_experience(entry)
            updated = await uow.profiles.update(profile)
            await uow.commit()
            await self._attach_owners(uow, [updated])
            return updated

    async def remove_experience(self, user_id: UUID, exp_id: UUID) -> Profile:
        """Remove an experience entry from the caller's profile."""
        async with self._uow_factory() as uow:
            profile = await self._lock_profile(uow, user_id)
            if not profile.remove_experience(exp_id):
                raise ExperienceNotFoundError(str(exp_id))
            updated = await uow.profiles.update(profile)
            await uow.commit()
            await self._attach_owners(uow, [updated])
            return updated

    async def add_education(self, user_id: UUID, entry: Education) -> Profile:
        """Prepend an education entry to the caller's profile."""
        _check_date_order(entry.from_date, entry.to_date)
        for name, label in (
            ("school", "School"),
            ("degree", "Degree"),
            ("field_of_study", "Field of study"),
        ):
            if not getattr(entry, name).strip():
                raise ValidationFailedError(f"{label} is required", field=name)

        async with self._uow_factory() as uow:
            profile = await self._lock_profile(uow, user_id)
            profile.add_education(entry)
            updated = await uow.profiles.update(profile)
            await uow.commit()
            await self._attach_owners(uow, [updated])
            return updated

    async def remove_education(self, user_id: UUID, edu_id: UUID) -> Profile:
        """Remove an education entry from the caller's profile."""
        async with self._uow_factory() as uow:
            profile = await self._lock_profile(uow, user_id)
            if not profile.remove_education(edu_id):
                raise EducationNotFoundError(str(edu_id))
            updated = await uow.profiles.update(profile)
            await uow.commit()
            await self._attach_owners(uow, [updated])
            return updated

    async def delete_account(self, user_id: UUID) -> None:
        """Delete the user's posts, profile and the user itself.

        Likes and comments the user left on other people's posts stay.
        """
        async with self._uow_factory() as uow:
            deleted_posts = await uow.posts.delete_by_user(user_id)
            await uow.profiles.delete_by_user(user_id)
            await uow.users.delete(user_id)
            await uow.commit()

        logger.info("account_deleted", user_id=str(user_id), deleted_posts=deleted_posts)

    async def _lock_profile(self, uow: IUnitOfWork, user_id: UUID) -> Profile:
        profile = await uow.profiles.get_by_user(user_id, for_update=True)
        if not profile:
            raise ProfileNotFoundError(NO_PROFILE_MESSAGE)
        return profile

    async def _attach_owners(self, uow: IUnitOfWork, profiles: Sequence[Profile]) -> None:
        """Fill in each profile's owner name and avatar."""
        if not profiles:
            return
        users = await uow.users.get_many(list({p.user_id for p in profiles}))
        for profile in profiles:
            owner = users.get(profile.user_id)
            if owner:
                profile.user_name = owner.name
                profile.user_avatar = owner.avatar

    @staticmethod
    def _build_profile_fields(fields: dict[str, Any]) -> dict[str, Any]:
        status = (fields.get("status") or "").strip()
        if not status:
            raise ValidationFailedError("Status is required", field="status")

        skills = split_skills(fields.get("skills") or [])
        if not skills:
            raise ValidationFailedError("Skills are required", field="skills")

        values: dict[str, Any] = {"status": status, "skills": skills}
        for name in _TEXT_FIELDS:
            if fields.get(name) is not None:
                values[name] = fields[name]

        website = fields.get("website")
        if website is not None:
            values["website"] = _normalize_link(website, "website")

        social = fields.get("social") or {}
        values["social"] = {
            platform: _normalize_link(social[platform], platform)
            for platform in SOCIAL_PLATFORMS
            if social.get(platform) is not None
        }
        return values


def _normalize_link(value: str, field: str) -> str:
    try:
        return normalize_url(value)
    except ValueError:
        raise ValidationFailedError("Please include a valid URL", field=field) from None


def _check_date_order(from_date: Any, to_date: Any) -> None:
    if to_date is not None and not from_date < to_date:
        raise ValidationFailedError(
            "From date must be before the to date",
            field="from_date",
        )
