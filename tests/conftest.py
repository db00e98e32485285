"""Shared pytest fixtures for VoiceScribe test suite.

Provides common test fixtures used across unit and integration tests,
including a mock STT provider, audio samples, settings, and database
setup helpers.
"""

import io
import math
import struct
import wave
from unittest.mock import AsyncMock

import pytest

# ---------------------------------------------------------------------------
# STT Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_stt():
    """Create a mock STT provider for unit testing.

    Returns:
        AsyncMock: A mock implementing the BaseSTT interface whose
        ``transcribe`` returns "hello world".
    """
    from src.services.transcription.base import BaseSTT

    stt = AsyncMock(spec=BaseSTT)
    stt.transcribe.return_value = "hello world"
    return stt


# ---------------------------------------------------------------------------
# Audio Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_pcm_bytes():
    """Generate 1 second of 440Hz sine-wave PCM audio (16kHz, 16-bit, mono).

    Returns:
        bytes: Raw PCM audio data.
    """
    sample_rate = 16000
    duration = 1.0
    frequency = 440.0
    amplitude = 16000  # ~50% of max int16

    samples = []
    for i in range(int(sample_rate * duration)):
        value = int(amplitude * math.sin(2 * math.pi * frequency * i / sample_rate))
        samples.append(struct.pack("<h", value))
    return b"".join(samples)


@pytest.fixture
def silent_pcm_bytes():
    """Generate 1 second of silence as PCM audio (16kHz, 16-bit, mono)."""
    sample_rate = 16000
    return b"\x00\x00" * sample_rate


def _to_wav(pcm: bytes) -> bytes:
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(16000)
        wf.writeframes(pcm)
    return buf.getvalue()


@pytest.fixture
def sample_wav_bytes(sample_pcm_bytes):
    """The 440Hz tone wrapped in a WAV container."""
    return _to_wav(sample_pcm_bytes)


@pytest.fixture
def silent_wav_bytes(silent_pcm_bytes):
    return _to_wav(silent_pcm_bytes)


# ---------------------------------------------------------------------------
# Settings / storage Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def uploads_dir(tmp_path):
    """Content directory path (not created until first use)."""
    return tmp_path / "uploads"


@pytest.fixture
def settings(uploads_dir):
    """Settings with required values filled in and .env loading disabled."""
    from src.core.config import Settings

    return Settings(
        _env_file=None,
        database_url="sqlite+aiosqlite:///:memory:",
        deepgram_api_key="test-key",
        uploads_dir=str(uploads_dir),
    )


@pytest.fixture
def content_store(uploads_dir):
    from src.services.storage.files import ContentStore

    return ContentStore(uploads_dir)


# ---------------------------------------------------------------------------
# Database Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
async def db_engine():
    """Create an in-memory SQLite async engine with tables, dispose after test."""
    from sqlalchemy.ext.asyncio import create_async_engine

    from src.services.storage import models_db  # noqa: F401
    from src.services.storage.database import Base

    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine):
    """Yield an AsyncSession bound to the test engine; rolls back after test."""
    from sqlalchemy.ext.asyncio import async_sessionmaker

    factory = async_sessionmaker(db_engine, expire_on_commit=False)
    async with factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def repository(db_session):
    """Return a TranscriptionRepository bound to the test session."""
    from src.services.storage.repository import TranscriptionRepository

    return TranscriptionRepository(db_session)


@pytest.fixture
def use_test_db(db_engine):
    """Point the module-level ``get_session()`` at the in-memory test engine."""
    from src.services.storage import database

    database._engine = db_engine
    database._session_factory = None
    yield db_engine
    database.reset_engine()
