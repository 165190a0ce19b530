"""Pydantic schemas for Profile API."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ProfileUpsert(BaseModel):
    """Schema for creating or updating the caller's profile.

    ``skills`` may be a list or a comma-separated string.
    """

    model_config = ConfigDict(populate_by_name=True)

    status: str = Field(..., min_length=1, max_length=255)
    skills: str | list[str]
    company: str | None = Field(None, max_length=255)
    location: str | None = Field(None, max_length=255)
    website: str | None = Field(None, max_length=500)
    bio: str | None = None
    spotlight_pin: str | None = Field(None, alias="spotlightpin", max_length=100)
    youtube: str | None = None
    twitter: str | None = None
    instagram: str | None = None
    linkedin: str | None = None
    facebook: str | None = None


class ExperienceCreate(BaseModel):
    """Schema for adding an experience entry."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1, max_length=255)
    company: str = Field(..., min_length=1, max_length=255)
    from_date: date = Field(..., alias="from")
    to_date: date | None = Field(None, alias="to")
    role: str | None = None
    director: str | None = None
    location: str | None = None
    current: bool = False
    description: str | None = None


class EducationCreate(BaseModel):
    """Schema for adding an education entry."""

    model_config = ConfigDict(populate_by_name=True)

    school: str = Field(..., min_length=1, max_length=255)
    degree: str = Field(..., min_length=1, max_length=255)
    field_of_study: str = Field(..., alias="fieldofstudy", min_length=1, max_length=255)
    from_date: date = Field(..., alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool = False
    description: str | None = None


class ExperienceResponse(ExperienceCreate):
    """Schema for an experience entry in responses."""

    id: UUID


class EducationResponse(EducationCreate):
    """Schema for an education entry in responses."""

    id: UUID


class ProfileOwner(BaseModel):
    """Owner fields embedded in a profile."""

    id: UUID
    name: str | None = None
    avatar: str | None = None


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    user: ProfileOwner
    status: str
    skills: list[str]
    company: str | None = None
    location: str | None = None
    website: str | None = None
    bio: str | None = None
    spotlight_pin: str | None = Field(None, alias="spotlightpin")
    social: dict[str, str] = Field(default_factory=dict)
    experience: list[ExperienceResponse] = Field(default_factory=list)
    education: list[EducationResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
