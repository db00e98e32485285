"""
Pydantic v2 request / response models used across the API layer.

Also holds the Deepgram response shape so the provider client can parse
the JSON body into typed, all-optional fields.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# System
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    """GET /health response."""

    status: str = "ok"
    version: str = "0.1.0"
    timestamp: datetime


class HelloResponse(BaseModel):
    """GET /api/hello response."""

    msg: str = "Hello from server"


# ---------------------------------------------------------------------------
# Upload / History
# ---------------------------------------------------------------------------


class UploadResponse(BaseModel):
    """POST /api/upload response."""

    transcription: str


class EntryResponse(BaseModel):
    """A single transcription entry as returned by GET /api/history."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(serialization_alias="_id")
    file_path: str = Field(serialization_alias="filePath")
    text: str
    created_at: datetime = Field(serialization_alias="createdAt")


class DeleteEntryResponse(BaseModel):
    """DELETE /api/history/{id} response."""

    message: str = "Deleted successfully"


# ---------------------------------------------------------------------------
# Deepgram pre-recorded response
# ---------------------------------------------------------------------------


class DeepgramAlternative(BaseModel):
    """One recognition hypothesis for a channel."""

    model_config = ConfigDict(extra="ignore")

    transcript: str | None = None
    confidence: float | None = None


class DeepgramChannel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    alternatives: list[DeepgramAlternative] = Field(default_factory=list)


class DeepgramResults(BaseModel):
    model_config = ConfigDict(extra="ignore")

    channels: list[DeepgramChannel] = Field(default_factory=list)


class DeepgramResponse(BaseModel):
    """Top-level body of ``POST /v1/listen``; every level may be missing."""

    model_config = ConfigDict(extra="ignore")

    results: DeepgramResults | None = None


# ---------------------------------------------------------------------------
# Error
# ---------------------------------------------------------------------------


class ErrorResponse(BaseModel):
    """Standard error envelope returned by the API."""

    error: str
    code: str
    timestamp: str
