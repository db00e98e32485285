"""Tests for the TranscriptionRepository CRUD layer.

All tests use an in-memory SQLite database provided by the ``repository`` fixture.
"""

from datetime import UTC, datetime, timedelta

import pytest

from src.core.exceptions import EntryNotFoundError
from src.services.storage.models_db import Transcription
from src.services.storage.repository import TranscriptionRepository


class TestCreateEntry:
    """Verify entry creation assigns id and timestamp."""

    async def test_assigns_id_and_created_at(self, repository: TranscriptionRepository) -> None:
        entry = await repository.create_entry(file_path="uploads/1.wav", text="hello")
        assert entry.id
        assert len(entry.id) == 32
        assert entry.created_at is not None
        assert entry.file_path == "uploads/1.wav"
        assert entry.text == "hello"

    async def test_ids_are_unique(self, repository: TranscriptionRepository) -> None:
        a = await repository.create_entry(file_path="uploads/1.wav", text="a")
        b = await repository.create_entry(file_path="uploads/2.wav", text="b")
        assert a.id != b.id


class TestGetEntry:
    async def test_existing(self, repository: TranscriptionRepository) -> None:
        created = await repository.create_entry(file_path="uploads/1.wav", text="x")
        fetched = await repository.get_entry(created.id)
        assert fetched.id == created.id

    async def test_not_found_raises(self, repository: TranscriptionRepository) -> None:
        with pytest.raises(EntryNotFoundError) as exc_info:
            await repository.get_entry("missing")
        assert exc_info.value.status_code == 404


class TestListEntries:
    async def test_empty(self, repository: TranscriptionRepository) -> None:
        assert await repository.list_entries() == []

    async def test_newest_first(self, repository: TranscriptionRepository, db_session) -> None:
        base = datetime(2025, 6, 1, tzinfo=UTC)
        for i, minutes in enumerate([10, 30, 20]):
            db_session.add(
                Transcription(
                    file_path=f"uploads/{i}.wav",
                    text=str(i),
                    created_at=base + timedelta(minutes=minutes),
                )
            )
        await db_session.flush()

        entries = await repository.list_entries()
        assert [e.text for e in entries] == ["1", "2", "0"]
        assert all(a.created_at >= b.created_at for a, b in zip(entries, entries[1:]))


class TestDeleteEntry:
    async def test_removes_row(self, repository: TranscriptionRepository) -> None:
        entry = await repository.create_entry(file_path="uploads/1.wav", text="x")
        await repository.delete_entry(entry.id)
        assert await repository.count_entries() == 0

    async def test_not_found_leaves_store_unchanged(
        self, repository: TranscriptionRepository
    ) -> None:
        await repository.create_entry(file_path="uploads/1.wav", text="x")
        with pytest.raises(EntryNotFoundError):
            await repository.delete_entry("missing")
        assert await repository.count_entries() == 1
