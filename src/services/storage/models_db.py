"""
SQLAlchemy ORM models for the VoiceScribe schema.

Tables: ``transcriptions``.
"""

import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.services.storage.database import Base


def _new_id() -> str:
    return uuid.uuid4().hex


class Transcription(Base):
    """One uploaded audio file and the text the provider returned for it."""

    __tablename__ = "transcriptions"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    file_path: Mapped[str] = mapped_column(String(512), unique=True)
    text: Mapped[str] = mapped_column(Text, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Transcription id={self.id} file={self.file_path!r}>"
