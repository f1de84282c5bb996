"""
Account service - registration, self profile and self-service update.
Challenge: Validate, enforce email/phone uniqueness and password ownership, then persist.
Design: Repositories and password functions are injected; easy to test with fakes.

The uniqueness checks are read-then-write and not atomic. They exist to give a
precise error code; the unique indexes on users.email/users.phone are what
actually hold the invariant under concurrent requests.
"""

import logging
from typing import Any, Callable

from app.core.errors import (
    AuthError,
    ConflictError,
    UserNotFoundError,
    ValidationFailedError,
)
from app.core.security import hash_password, verify_password
from app.db.models.user import User
from app.db.repositories.file_repository import FileRepository
from app.db.repositories.user_repository import UserRepository
from app.schemas.user import AvatarResponse, UserProfile, UserPublic
from app.services.account_validation import validate_registration, validate_update

logger = logging.getLogger(__name__)


def _to_public(user: User) -> UserPublic:
    return UserPublic(id=user.id, name=user.name, email=user.email, phone=user.phone)


def _to_profile(user: User) -> UserProfile:
    avatar = user.avatar
    return UserProfile(
        id=user.id,
        name=user.name,
        email=user.email,
        phone=user.phone,
        avatar=AvatarResponse.model_validate(avatar) if avatar is not None else None,
    )


class AccountService:
    """Account use cases. Every failure raises an AccountError and nothing is written."""

    def __init__(
        self,
        user_repo: UserRepository,
        file_repo: FileRepository,
        hasher: Callable[[str], str] = hash_password,
        verifier: Callable[[str, str], bool] = verify_password,
    ):
        self.user_repo = user_repo
        self.file_repo = file_repo
        self.hasher = hasher
        self.verifier = verifier

    async def _ensure_email_free(self, email: str) -> None:
        if await self.user_repo.get_by_email(email):
            raise ConflictError("email")

    async def _ensure_phone_free(self, phone: str) -> None:
        if await self.user_repo.get_by_phone(phone):
            raise ConflictError("phone")

    async def register(self, payload: Any) -> UserPublic:
        """Create an account. Email is checked before phone; first conflict wins."""
        result = validate_registration(payload)
        if not result.ok:
            logger.debug("register rejected: %s", ", ".join(result.reasons))
            raise ValidationFailedError(result.reasons)
        data = result.data

        await self._ensure_email_free(data.email)
        await self._ensure_phone_free(data.phone)

        user = User(
            name=data.name,
            email=data.email,
            phone=data.phone,
            password_hash=self.hasher(data.password),
        )
        user = await self.user_repo.add(user)
        logger.info("user registered id=%s", user.id)
        return _to_public(user)

    async def get_profile(self, user_id: int) -> UserProfile | None:
        """Caller's own profile with avatar, or None when the record is gone."""
        user = await self.user_repo.get_by_id_with_avatar(user_id)
        if user is None:
            return None
        return _to_profile(user)

    async def update(self, user_id: int, payload: Any) -> UserPublic:
        """
        Apply a partial update to the caller's own record.

        Order: validation, email conflict, phone conflict, current password,
        avatar reference. Only name, email, phone, password and avatar_id are
        ever written.
        """
        result = validate_update(payload)
        if not result.ok:
            logger.debug("update rejected for user %s: %s", user_id, ", ".join(result.reasons))
            raise ValidationFailedError(result.reasons)
        data = result.data

        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError()

        if data.email and data.email != user.email:
            await self._ensure_email_free(data.email)

        if data.phone and data.phone != user.phone:
            await self._ensure_phone_free(data.phone)

        if data.old_password and not self.verifier(data.old_password, user.password_hash):
            raise AuthError()

        if data.avatar_id is not None and await self.file_repo.get_by_id(data.avatar_id) is None:
            raise ValidationFailedError(("avatar_not_found",))

        if data.name:
            user.name = data.name
        if data.email:
            user.email = data.email
        if data.phone:
            user.phone = data.phone
        if data.password:
            user.password_hash = self.hasher(data.password)
        if data.avatar_id is not None:
            user.avatar_id = data.avatar_id

        user = await self.user_repo.save(user)
        logger.info("user updated id=%s password_changed=%s", user.id, bool(data.password))
        return _to_public(user)
