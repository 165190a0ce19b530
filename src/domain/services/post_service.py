"""Post service layer with business logic."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    CommentNotFoundError,
    ForbiddenError,
    PostAlreadyLikedError,
    PostNotFoundError,
    UserNotFoundError,
    ValidationFailedError,
)
from domain.entities.post import Comment, Like, Post
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class PostService:
    """Service layer for Post business logic.

    Likes and comments live inside the post row. Every mutation locks the
    post, changes the entity in memory and writes the lists back.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def create(self, user_id: UUID, text: str) -> Post:
        """Create a post, snapshotting the author's name and avatar."""
        if not text.strip():
            raise ValidationFailedError("Text is required", field="text")

        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))

            post = Post(
                user_id=user_id,
                text=text,
                name=user.name,
                avatar=user.avatar,
            )
            created = await uow.posts.create(post)
            await uow.commit()

        logger.info("post_created", post_id=str(created.id), user_id=str(user_id))
        return created

    async def get_all(self) -> list[Post]:
        """Get all posts, newest first."""
        async with self._uow_factory() as uow:
            return await uow.posts.get_all()

    async def get(self, post_id: UUID) -> Post:
        """Get a single post."""
        async with self._uow_factory() as uow:
            post = await uow.posts.get(post_id)
            if not post:
                raise PostNotFoundError(str(post_id))
            return post

    async def delete(self, post_id: UUID, user_id: UUID) -> None:
        """Delete a post. Only its author may do this."""
        async with self._uow_factory() as uow:
            post = await uow.posts.get(post_id)
            if not post:
                raise PostNotFoundError(str(post_id))
            if post.user_id != user_id:
                raise ForbiddenError()

            await uow.posts.delete(post_id)
            await uow.commit()

        logger.info("post_deleted", post_id=str(post_id), user_id=str(user_id))

    async def like(self, post_id: UUID, user_id: UUID) -> list[Like]:
        """Like a post once. Returns the updated like list."""
        async with self._uow_factory() as uow:
            post = await self._lock_post(uow, post_id)
            if post.is_liked_by(user_id):
                raise PostAlreadyLikedError(str(post_id))

            post.add_like(user_id)
            updated = await uow.posts.update(post)
            await uow.commit()
            return updated.likes

    async def unlike(self, post_id: UUID, user_id: UUID) -> list[Like]:
        """Withdraw the caller's like.

        A post the caller never liked is left as it is.
        """
        async with self._uow_factory() as uow:
            post = await self._lock_post(uow, post_id)
            if not post.is_liked_by(user_id):
                return post.likes

            post.remove_like(user_id)
            updated = await uow.posts.update(post)
            await uow.commit()
            return updated.likes

    async def add_comment(self, post_id: UUID, user_id: UUID, text: str) -> list[Comment]:
        """Prepend a comment. Returns the updated comment list."""
        if not text.strip():
            raise ValidationFailedError("Text is required", field="text")

        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))

            post = await self._lock_post(uow, post_id)
            post.add_comment(
                Comment(
                    user_id=user_id,
                    text=text,
                    name=user.name,
                    avatar=user.avatar,
                )
            )
            updated = await uow.posts.update(post)
            await uow.commit()
            return updated.comments

    async def remove_comment(
        self, post_id: UUID, comment_id: UUID, user_id: UUID
    ) -> list[Comment]:
        """Remove a comment. Only the comment's author may do this."""
        async with self._uow_factory() as uow:
            post = await self._lock_post(uow, post_id)
            comment = post.find_comment(comment_id)
            if not comment:
                raise CommentNotFoundError(str(comment_id))
            if comment.user_id != user_id:
                raise ForbiddenError()

            post.remove_comment(comment_id)
            updated = await uow.posts.update(post)
            await uow.commit()
            return updated.comments

    async def _lock_post(self, uow: IUnitOfWork, post_id: UUID) -> Post:
        post = await uow.posts.get(post_id, for_update=True)
        if not post:
            raise PostNotFoundError(str(post_id))
        return post
