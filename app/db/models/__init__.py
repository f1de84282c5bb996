from app.db.models.file import File
from app.db.models.user import User

__all__ = ["User", "File"]
