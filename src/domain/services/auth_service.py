"""Registration, login and account lookup."""

from collections.abc import Callable
from typing import Protocol
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    InvalidCredentialsError,
    UserAlreadyExistsError,
    UserNotFoundError,
    ValidationFailedError,
)
from domain.entities.user import User
from domain.normalize import gravatar_url
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

MIN_PASSWORD_LENGTH = 6


class ITokenIssuer(Protocol):
    def create_token(self, user_id: UUID) -> str: ...


class IPasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...

    def verify(self, password: str, hashed: str) -> bool: ...


class AuthService:
    """Issues session tokens for new and returning users."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        token_issuer: ITokenIssuer,
        password_hasher: IPasswordHasher,
    ) -> None:
        self._uow_factory = uow_factory
        self._tokens = token_issuer
        self._hasher = password_hasher

    async def register(self, name: str, email: str, password: str) -> str:
        """Create a user and return a session token for it.

        Raises:
            ValidationFailedError: name blank or password too short
            UserAlreadyExistsError: email already registered
        """
        name = name.strip()
        email = email.strip().lower()
        if not name:
            raise ValidationFailedError("Name is required", field="name")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationFailedError(
                "Please enter a password with 6 or more characters",
                field="password",
            )

        async with self._uow_factory() as uow:
            if await uow.users.get_by_email(email):
                raise UserAlreadyExistsError(email)

            user = User(
                name=name,
                email=email,
                avatar=gravatar_url(email),
                password_hash=self._hasher.hash(password),
            )
            try:
                created = await uow.users.create(user)
                await uow.commit()
            except IntegrityError:
                # Lost a race with a concurrent registration for the same email
                await uow.rollback()
                raise UserAlreadyExistsError(email)

        logger.info("user_registered", user_id=str(created.id))
        return self._tokens.create_token(created.id)

    async def authenticate(self, email: str, password: str) -> str:
        """Check credentials and return a fresh session token.

        Unknown email and wrong password are indistinguishable to the caller.
        """
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_email(email.strip().lower())

        if not user or not self._hasher.verify(password, user.password_hash):
            logger.info("login_failed")
            raise InvalidCredentialsError()

        logger.info("user_logged_in", user_id=str(user.id))
        return self._tokens.create_token(user.id)

    async def get_account(self, user_id: UUID) -> User:
        """Get the user behind a verified token."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))
            return user
