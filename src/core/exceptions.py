"""
VoiceScribe exception hierarchy.

All application-specific exceptions inherit from VoiceScribeError,
enabling centralized error handling in the API middleware layer.
"""

from datetime import UTC, datetime


class VoiceScribeError(Exception):
    """Base exception for all VoiceScribe errors."""

    def __init__(
        self,
        detail: str = "An unexpected error occurred",
        code: str = "VOICESCRIBE_ERROR",
        status_code: int = 500,
    ) -> None:
        self.detail = detail
        self.code = code
        self.status_code = status_code
        self.timestamp = datetime.now(UTC).isoformat()
        super().__init__(detail)


class NoAudioFileError(VoiceScribeError):
    """Raised when an upload request carries no audio file."""

    def __init__(self) -> None:
        super().__init__(
            detail="No audio file uploaded.",
            code="NO_AUDIO_FILE",
            status_code=400,
        )


class EntryNotFoundError(VoiceScribeError):
    """Raised when a transcription entry ID does not exist."""

    def __init__(self, entry_id: str) -> None:
        self.entry_id = entry_id
        super().__init__(
            detail="Transcription not found",
            code="ENTRY_NOT_FOUND",
            status_code=404,
        )


class TranscriptionError(VoiceScribeError):
    """Raised when the transcription provider call fails."""

    def __init__(self, detail: str = "Transcription failed") -> None:
        super().__init__(
            detail=detail,
            code="TRANSCRIPTION_ERROR",
            status_code=502,
        )


class StorageError(VoiceScribeError):
    """Raised when the record store or content directory cannot be used."""

    def __init__(self, detail: str = "Storage operation failed") -> None:
        super().__init__(detail=detail, code="STORAGE_ERROR", status_code=500)


class ConfigurationError(VoiceScribeError):
    """Raised at startup when required settings are missing."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(
            detail=f"Missing required environment variables: {', '.join(missing)}",
            code="CONFIGURATION_ERROR",
            status_code=500,
        )
