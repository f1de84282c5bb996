"""
User repository - encapsulates all user data access (SOLID: Single Responsibility).
Lookups by unique field back the conflict pre-checks; the unique indexes are the real guarantee.
"""

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from app.db.models.user import User
from app.db.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    """User-specific queries. Extends base CRUD with lookups by email/phone."""

    def __init__(self, session):
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> User | None:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_by_phone(self, phone: str) -> User | None:
        result = await self.session.execute(select(User).where(User.phone == phone))
        return result.scalar_one_or_none()

    async def get_by_id_with_avatar(self, id: int) -> User | None:
        """Fetch user with avatar loaded (no lazy load in async context)."""
        result = await self.session.execute(
            select(User)
            .where(User.id == id)
            .options(selectinload(User.avatar))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()
