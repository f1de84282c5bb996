"""
User endpoints - registration, own profile and self-service update (RESTful API).
Design: Thin controller; AccountService holds the workflow, errors map via exception handlers.
"""

from typing import Any

from fastapi import APIRouter, Body

from app.core.dependencies import CurrentUserId
from app.db.repositories.file_repository import FileRepository
from app.db.repositories.user_repository import UserRepository
from app.db.session import DbSession
from app.schemas.user import UserProfile, UserPublic
from app.services.account_service import AccountService

router = APIRouter()


def _get_account_service(session: DbSession) -> AccountService:
    """Factory for service with repository injection (Dependency Inversion)."""
    return AccountService(UserRepository(session), FileRepository(session))


@router.post("", response_model=UserPublic)
async def register(session: DbSession, payload: dict[str, Any] = Body(...)):
    """Create new user. Returns the public projection, never the password hash."""
    svc = _get_account_service(session)
    return await svc.register(payload)


@router.get("/me", response_model=UserProfile | None)
async def get_me(session: DbSession, user_id: CurrentUserId):
    """Caller's profile with avatar. null when the record no longer exists."""
    svc = _get_account_service(session)
    return await svc.get_profile(user_id)


@router.put("/me", response_model=UserPublic)
async def update_me(session: DbSession, user_id: CurrentUserId, payload: dict[str, Any] = Body(...)):
    """Partial update of the caller's own record."""
    svc = _get_account_service(session)
    return await svc.update(user_id, payload)
