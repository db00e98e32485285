"""
CRUD repository for transcription entries.

``TranscriptionRepository`` receives an ``AsyncSession`` and provides all
data-access methods.  It calls ``flush()`` rather than ``commit()`` so
that transaction boundaries are controlled by the caller (typically
:func:`get_session`).
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.exceptions import EntryNotFoundError
from src.services.storage.models_db import Transcription

logger = logging.getLogger(__name__)


class TranscriptionRepository:
    """Data-access layer for the ``transcriptions`` table.

    Args:
        session: An active SQLAlchemy ``AsyncSession``.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_entry(self, file_path: str, text: str) -> Transcription:
        """Insert a new entry; ``id`` and ``created_at`` are assigned here."""
        entry = Transcription(file_path=file_path, text=text)
        self._session.add(entry)
        await self._session.flush()
        return entry

    async def get_entry(self, entry_id: str) -> Transcription:
        """Return an entry by ID or raise :class:`EntryNotFoundError`."""
        entry = await self._session.get(Transcription, entry_id)
        if entry is None:
            raise EntryNotFoundError(entry_id)
        return entry

    async def list_entries(self) -> list[Transcription]:
        """Return every entry, newest first."""
        stmt = select(Transcription).order_by(
            Transcription.created_at.desc(), Transcription.id.desc()
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def count_entries(self) -> int:
        result = await self._session.execute(select(func.count()).select_from(Transcription))
        return result.scalar_one()

    async def delete_entry(self, entry_id: str) -> None:
        entry = await self.get_entry(entry_id)
        await self._session.delete(entry)
        await self._session.flush()
