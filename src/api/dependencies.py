"""
Request-scoped accessors for the application context.

The content store and STT provider are built once per application and
kept on ``app.state``; routes receive them through ``Depends``.
"""

from fastapi import Request

from src.services.storage.files import ContentStore
from src.services.transcription.base import BaseSTT


def get_content_store(request: Request) -> ContentStore:
    return request.app.state.content_store


def get_stt(request: Request) -> BaseSTT:
    return request.app.state.stt
