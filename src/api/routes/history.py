"""
History REST endpoints.

Lists stored transcriptions newest first and deletes single entries
together with their audio files.
"""

from datetime import UTC

from fastapi import APIRouter, Depends

from src.api.dependencies import get_content_store
from src.core.models import DeleteEntryResponse, EntryResponse, ErrorResponse
from src.services.history import delete_history_entry, list_history
from src.services.storage.files import ContentStore
from src.services.storage.models_db import Transcription

router = APIRouter(prefix="/history", tags=["history"])


def _to_response(entry: Transcription) -> EntryResponse:
    """Convert an ORM Transcription object to its API response model."""
    created_at = entry.created_at
    # SQLite drops tzinfo; stored values are always UTC.
    if created_at is not None and created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)
    return EntryResponse(
        id=entry.id,
        file_path=entry.file_path,
        text=entry.text,
        created_at=created_at,
    )


@router.get("", response_model=list[EntryResponse], responses={500: {"model": ErrorResponse}})
async def get_history():
    """List all transcriptions, newest first."""
    entries = await list_history()
    return [_to_response(e) for e in entries]


@router.delete(
    "/{entry_id}",
    response_model=DeleteEntryResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def delete_history(entry_id: str, store: ContentStore = Depends(get_content_store)):
    """Delete a transcription and its audio file."""
    await delete_history_entry(entry_id, store)
    return DeleteEntryResponse()
