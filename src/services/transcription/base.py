"""
Abstract base class for Speech-to-Text providers.

All STT implementations must implement this interface, enabling
provider-agnostic transcription in the upload pipeline.
"""

from abc import ABC, abstractmethod
from pathlib import Path

# Placeholder transcripts stored when no real text is available.
NO_SPEECH_TEXT = "No speech detected in audio."
UNABLE_TO_TRANSCRIBE_TEXT = "Unable to transcribe this audio."


class BaseSTT(ABC):
    """Interface that every STT provider must implement."""

    @abstractmethod
    async def transcribe(self, audio_path: str | Path, **kwargs) -> str:
        """Transcribe an audio file to text.

        Args:
            audio_path: Path to the stored audio file.
            **kwargs: Provider-specific options (mimetype, etc.).

        Returns:
            The transcript, or the no-speech placeholder when the provider
            recognised nothing.

        Raises:
            TranscriptionError: On network, HTTP or malformed-response failures.
        """

    async def aclose(self) -> None:
        """Release network resources held by the provider (no-op by default)."""
