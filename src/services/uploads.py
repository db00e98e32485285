"""
Upload pipeline: store the file, transcribe it, record the result.

Each step runs sequentially for a single request. Provider failures are
converted to a placeholder transcript and persistence failures on insert
are logged, so once the file is on disk the caller always gets a
transcript back.
"""

import asyncio
import logging
from typing import BinaryIO

from src.core.exceptions import NoAudioFileError, StorageError, TranscriptionError
from src.services.storage.database import get_session
from src.services.storage.files import ContentStore
from src.services.storage.repository import TranscriptionRepository
from src.services.transcription.base import UNABLE_TO_TRANSCRIBE_TEXT, BaseSTT

logger = logging.getLogger(__name__)


async def process_upload(
    source: BinaryIO | None,
    filename: str | None,
    content_type: str | None,
    store: ContentStore,
    stt: BaseSTT,
) -> str:
    """Run the upload → transcribe → persist pipeline for one audio file.

    Args:
        source: Readable binary stream of the uploaded file, or None.
        filename: Original client-side filename (used for the extension).
        content_type: MIME type reported by the client, forwarded to the provider.
        store: Content directory the file is written to.
        stt: Transcription provider.

    Returns:
        The transcript, or a placeholder string when the provider fails or
        hears nothing.

    Raises:
        NoAudioFileError: If no file was sent.
        StorageError: If the file cannot be written to the content directory.
    """
    if source is None or not filename:
        raise NoAudioFileError()

    try:
        relative_path = await asyncio.to_thread(store.save, source, filename)
    except OSError as exc:
        logger.error("Failed to store upload %s: %s", filename, exc)
        raise StorageError("Failed to store uploaded file") from exc

    mimetype = content_type if content_type and content_type.startswith("audio/") else None
    try:
        text = await stt.transcribe(store.resolve(relative_path), mimetype=mimetype)
    except TranscriptionError as exc:
        logger.warning("Transcription failed for %s: %s", relative_path, exc.detail)
        text = UNABLE_TO_TRANSCRIBE_TEXT

    try:
        async with get_session() as session:
            repo = TranscriptionRepository(session)
            await repo.create_entry(file_path=relative_path, text=text)
    except Exception:
        logger.error("Failed to save transcription for %s", relative_path, exc_info=True)

    return text
