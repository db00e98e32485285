"""
Storage module - Database and file system operations.
"""

from src.services.storage.database import (
    Base,
    close_db,
    get_engine,
    get_session,
    init_db,
    reset_engine,
)
from src.services.storage.files import ContentStore
from src.services.storage.models_db import Transcription
from src.services.storage.repository import TranscriptionRepository

__all__ = [
    "Base",
    "ContentStore",
    "Transcription",
    "TranscriptionRepository",
    "close_db",
    "get_engine",
    "get_session",
    "init_db",
    "reset_engine",
]
