"""Post domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class Like:
    """A like on a post. At most one per user."""

    user_id: UUID
    id: UUID = field(default_factory=uuid4)


@dataclass
class Comment:
    """A comment on a post, with a snapshot of its author."""

    user_id: UUID
    text: str
    id: UUID = field(default_factory=uuid4)
    name: str | None = None
    avatar: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Post:
    """Domain entity for a feed post.

    ``likes`` and ``comments`` are ordered most-recent-first.
    """

    user_id: UUID
    text: str
    id: UUID = field(default_factory=uuid4)
    name: str | None = None
    avatar: str | None = None
    likes: list[Like] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)

    def is_liked_by(self, user_id: UUID) -> bool:
        return any(like.user_id == user_id for like in self.likes)

    def add_like(self, user_id: UUID) -> None:
        self.likes.insert(0, Like(user_id=user_id))

    def remove_like(self, user_id: UUID) -> None:
        self.likes = [like for like in self.likes if like.user_id != user_id]

    def find_comment(self, comment_id: UUID) -> Comment | None:
        return next((c for c in self.comments if c.id == comment_id), None)

    def add_comment(self, comment: Comment) -> None:
        self.comments.insert(0, comment)

    def remove_comment(self, comment_id: UUID) -> None:
        self.comments = [c for c in self.comments if c.id != comment_id]
