# Repository layer - Data access with Pydantic responses

from .base import BaseRepository
from .user_repository import UserRepository
from .points_repository import PointsRepository
from .chat_repository import ChatRepository
from .note_repository import NoteRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "PointsRepository",
    "ChatRepository",
    "NoteRepository",
]
