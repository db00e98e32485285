"""Integration test fixtures for VoiceScribe.

Provides an async HTTP client backed by an in-memory SQLite database,
a temporary content directory, and a mocked STT provider.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from src.api.app import create_app
from src.services.storage.database import get_session
from src.services.storage.repository import TranscriptionRepository


@pytest.fixture
def app(settings, mock_stt):
    """Create a fresh FastAPI application wired to test settings and the mock STT."""
    return create_app(settings=settings, stt=mock_stt)


@pytest.fixture
async def async_client(app, use_test_db, uploads_dir):
    """AsyncClient backed by the in-memory test engine.

    ``ASGITransport`` does not run the lifespan, so the content directory
    is created here the way startup would.
    """
    uploads_dir.mkdir(parents=True, exist_ok=True)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def count_entries(use_test_db):
    """Async helper returning the number of stored entries."""

    async def _count() -> int:
        async with get_session() as session:
            return await TranscriptionRepository(session).count_entries()

    return _count
