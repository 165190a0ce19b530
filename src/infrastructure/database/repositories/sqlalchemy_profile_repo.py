"""SQLAlchemy implementation of Profile repository."""

from datetime import date, datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import Education, Experience, Profile
from infrastructure.database.models import ProfileModel

# Dialects with INSERT ... ON CONFLICT support
_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_user(self, user_id: UUID, for_update: bool = False) -> Profile | None:
        """Get the profile owned by a user."""
        model = await self._get_model_by_user(user_id, for_update=for_update)
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Profile]:
        """Get every profile."""
        stmt = select(ProfileModel).order_by(ProfileModel.created_at)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def upsert(self, user_id: UUID, fields: dict[str, Any]) -> Profile:
        """Insert the profile or overwrite ``fields`` in one statement.

        Keyed on the unique ``user_id`` column, so concurrent calls for the
        same user can never produce two rows.
        """
        dialect = self._session.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise NotImplementedError(f"Profile upsert is not supported on {dialect}")

        now = datetime.utcnow()
        stmt = insert(ProfileModel).values(
            id=uuid4(),
            user_id=user_id,
            experience=[],
            education=[],
            created_at=now,
            updated_at=now,
            **fields,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[ProfileModel.user_id],
            set_={**fields, "updated_at": now},
        )
        await self._session.execute(stmt)

        model = await self._get_model_by_user(user_id, populate_existing=True)
        if not model:
            raise ValueError(f"Profile for user {user_id} not found after upsert")
        return self._to_entity(model)

    async def update(self, profile: Profile) -> Profile:
        """Write the whole profile back, embedded lists included."""
        stmt = select(ProfileModel).where(ProfileModel.id == profile.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Profile {profile.id} not found")

        model.status = profile.status
        model.skills = list(profile.skills)
        model.company = profile.company
        model.location = profile.location
        model.website = profile.website
        model.bio = profile.bio
        model.spotlight_pin = profile.spotlight_pin
        model.social = dict(profile.social)
        model.experience = [_experience_to_dict(exp) for exp in profile.experience]
        model.education = [_education_to_dict(edu) for edu in profile.education]

        await self._session.flush()
        return self._to_entity(model)

    async def delete_by_user(self, user_id: UUID) -> bool:
        """Delete the profile owned by a user."""
        stmt = delete(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    async def _get_model_by_user(
        self,
        user_id: UUID,
        for_update: bool = False,
        populate_existing: bool = False,
    ) -> ProfileModel | None:
        stmt = select(ProfileModel).where(ProfileModel.user_id == user_id)
        if for_update:
            stmt = stmt.with_for_update()
        if populate_existing:
            stmt = stmt.execution_options(populate_existing=True)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            user_id=model.user_id,
            status=model.status,
            skills=list(model.skills or []),
            company=model.company,
            location=model.location,
            website=model.website,
            bio=model.bio,
            spotlight_pin=model.spotlight_pin,
            social=dict(model.social or {}),
            experience=[_experience_from_dict(item) for item in model.experience or []],
            education=[_education_from_dict(item) for item in model.education or []],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


def _date_or_none(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


def _experience_to_dict(exp: Experience) -> dict[str, Any]:
    return {
        "id": str(exp.id),
        "title": exp.title,
        "role": exp.role,
        "company": exp.company,
        "director": exp.director,
        "location": exp.location,
        "from": exp.from_date.isoformat(),
        "to": exp.to_date.isoformat() if exp.to_date else None,
        "current": exp.current,
        "description": exp.description,
    }


def _experience_from_dict(data: dict[str, Any]) -> Experience:
    return Experience(
        id=UUID(data["id"]),
        title=data["title"],
        role=data.get("role"),
        company=data["company"],
        director=data.get("director"),
        location=data.get("location"),
        from_date=date.fromisoformat(data["from"]),
        to_date=_date_or_none(data.get("to")),
        current=bool(data.get("current", False)),
        description=data.get("description"),
    )


def _education_to_dict(edu: Education) -> dict[str, Any]:
    return {
        "id": str(edu.id),
        "school": edu.school,
        "degree": edu.degree,
        "fieldofstudy": edu.field_of_study,
        "from": edu.from_date.isoformat(),
        "to": edu.to_date.isoformat() if edu.to_date else None,
        "current": edu.current,
        "description": edu.description,
    }


def _education_from_dict(data: dict[str, Any]) -> Education:
    return Education(
        id=UUID(data["id"]),
        school=data["school"],
        degree=data["degree"],
        field_of_study=data["fieldofstudy"],
        from_date=date.fromisoformat(data["from"]),
        to_date=_date_or_none(data.get("to")),
        current=bool(data.get("current", False)),
        description=data.get("description"),
    )
