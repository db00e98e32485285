"""
Deepgram STT provider implementation.

Sends a stored audio file to Deepgram's pre-recorded ``/v1/listen``
endpoint in a single request and extracts the transcript of the first
channel's first alternative. One attempt is made per file;
callers decide what to store when it fails.
"""

import logging
import mimetypes
from collections.abc import AsyncIterator
from pathlib import Path

import anyio
import httpx
from pydantic import ValidationError

from src.core.config import get_settings
from src.core.exceptions import TranscriptionError
from src.core.models import DeepgramResponse
from src.services.transcription.base import NO_SPEECH_TEXT, BaseSTT

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


def extract_transcript(response: DeepgramResponse) -> str:
    """Return ``results.channels[0].alternatives[0].transcript``.

    Any missing level, or an empty transcript, yields ``NO_SPEECH_TEXT``.
    """
    results = response.results
    if results is None or not results.channels:
        return NO_SPEECH_TEXT
    alternatives = results.channels[0].alternatives
    if not alternatives:
        return NO_SPEECH_TEXT
    transcript = (alternatives[0].transcript or "").strip()
    return transcript or NO_SPEECH_TEXT


async def _iter_file(path: Path) -> AsyncIterator[bytes]:
    """Stream a file in chunks without blocking the event loop."""
    async with await anyio.open_file(path, "rb") as fh:
        while chunk := await fh.read(_CHUNK_SIZE):
            yield chunk


class DeepgramSTT(BaseSTT):
    """Speech-to-text provider backed by the Deepgram REST API.

    Args:
        api_key: Deepgram API key (falls back to settings if not provided).
        model: Acoustic model name (e.g. "nova-2").
        smart_format: Whether Deepgram should punctuate / format numbers.
        base_url: API root, overridable for tests and self-hosted deployments.
        timeout: httpx timeout in seconds for the single call.
        transport: Optional httpx transport (``httpx.MockTransport`` in tests).
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        smart_format: bool | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self._api_key = api_key or settings.deepgram_api_key
        self._model = model or settings.deepgram_model
        self._smart_format = (
            settings.deepgram_smart_format if smart_format is None else smart_format
        )
        self._base_url = (base_url or settings.deepgram_base_url).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout if timeout is not None else settings.deepgram_timeout,
            headers={"Authorization": f"Token {self._api_key}"},
            transport=transport,
        )

    @property
    def options(self) -> dict[str, str]:
        """Fixed query options sent with every request."""
        return {
            "model": self._model,
            "smart_format": "true" if self._smart_format else "false",
        }

    async def transcribe(self, audio_path: str | Path, **kwargs) -> str:
        path = Path(audio_path)
        mimetype = kwargs.get("mimetype") or (
            mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        )

        try:
            resp = await self._client.post(
                "/v1/listen",
                params=self.options,
                headers={"Content-Type": mimetype},
                content=_iter_file(path),
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Deepgram returned HTTP %s for %s: %s",
                exc.response.status_code,
                path.name,
                exc.response.text[:200],
            )
            raise TranscriptionError(
                f"Deepgram error: HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("Deepgram request failed for %s: %s", path.name, exc)
            raise TranscriptionError(f"Deepgram request failed: {exc}") from exc
        except OSError as exc:
            logger.error("Cannot read audio file %s: %s", path, exc)
            raise TranscriptionError(f"Cannot read audio file: {exc}") from exc

        try:
            parsed = DeepgramResponse.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:
            logger.warning("Malformed Deepgram response for %s: %s", path.name, exc)
            raise TranscriptionError("Malformed Deepgram response") from exc

        return extract_transcript(parsed)

    async def aclose(self) -> None:
        await self._client.aclose()
