"""
Upload REST endpoint.

``POST /api/upload`` accepts one multipart field ``audio`` and returns the
transcript. All work is delegated to :func:`process_upload`.
"""

from fastapi import APIRouter, Depends, File, UploadFile

from src.api.dependencies import get_content_store, get_stt
from src.core.models import ErrorResponse, UploadResponse
from src.services.storage.files import ContentStore
from src.services.transcription.base import BaseSTT
from src.services.uploads import process_upload

router = APIRouter(tags=["upload"])


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def upload_audio(
    audio: UploadFile | None = File(None),
    store: ContentStore = Depends(get_content_store),
    stt: BaseSTT = Depends(get_stt),
) -> UploadResponse:
    """Store an audio file, transcribe it and record the result."""
    text = await process_upload(
        source=audio.file if audio is not None else None,
        filename=audio.filename if audio is not None else None,
        content_type=audio.content_type if audio is not None else None,
        store=store,
        stt=stt,
    )
    return UploadResponse(transcription=text)
