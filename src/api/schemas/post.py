"""Pydantic schemas for Post API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class PostCreate(BaseModel):
    """Schema for creating a post."""

    text: str = Field(..., min_length=1)


class CommentCreate(BaseModel):
    """Schema for commenting on a post."""

    text: str = Field(..., min_length=1)


class LikeResponse(BaseModel):
    """A like on a post."""

    id: UUID
    user: UUID


class CommentResponse(BaseModel):
    """A comment on a post."""

    id: UUID
    user: UUID
    text: str
    name: str | None = None
    avatar: str | None = None
    created_at: datetime


class PostResponse(BaseModel):
    """Schema for Post response."""

    id: UUID
    user: UUID
    text: str
    name: str | None = None
    avatar: str | None = None
    likes: list[LikeResponse] = Field(default_factory=list)
    comments: list[CommentResponse] = Field(default_factory=list)
    created_at: datetime
