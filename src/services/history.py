"""Listing and deleting stored transcriptions."""

import logging

from sqlalchemy.exc import SQLAlchemyError

from src.core.exceptions import StorageError
from src.services.storage.database import get_session
from src.services.storage.files import ContentStore
from src.services.storage.models_db import Transcription
from src.services.storage.repository import TranscriptionRepository

logger = logging.getLogger(__name__)


async def list_history() -> list[Transcription]:
    """Return all entries newest first.

    Raises:
        StorageError: If the record store cannot be queried.
    """
    try:
        async with get_session() as session:
            return await TranscriptionRepository(session).list_entries()
    except SQLAlchemyError as exc:
        logger.error("Failed to list transcriptions: %s", exc)
        raise StorageError("Failed to fetch history") from exc


async def delete_history_entry(entry_id: str, store: ContentStore) -> None:
    """Delete an entry and, best-effort, its audio file.

    The file is removed before the row. A file that is already gone only
    gets a warning.

    Raises:
        EntryNotFoundError: If no entry has *entry_id*.
        StorageError: On any other file system or database failure.
    """
    try:
        async with get_session() as session:
            repo = TranscriptionRepository(session)
            entry = await repo.get_entry(entry_id)

            try:
                store.delete(entry.file_path)
            except ValueError:
                logger.warning(
                    "Refusing to delete %s for entry %s: outside content directory",
                    entry.file_path,
                    entry_id,
                )
            except OSError as exc:
                logger.error("Failed to delete audio %s: %s", entry.file_path, exc)
                raise StorageError("Failed to delete audio file") from exc

            await repo.delete_entry(entry_id)
    except SQLAlchemyError as exc:
        logger.error("Failed to delete transcription %s: %s", entry_id, exc)
        raise StorageError("Failed to delete transcription") from exc

    logger.info("Deleted transcription %s", entry_id)
