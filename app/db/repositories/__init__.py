# Repository pattern: abstract data access (SOLID - Dependency Inversion)

from app.db.repositories.file_repository import FileRepository
from app.db.repositories.user_repository import UserRepository

__all__ = ["UserRepository", "FileRepository"]
