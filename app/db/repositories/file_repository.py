"""
File repository - read access to stored file metadata (avatars).
"""

from app.db.models.file import File
from app.db.repositories.base_repository import BaseRepository


class FileRepository(BaseRepository[File]):
    def __init__(self, session):
        super().__init__(session, File)
