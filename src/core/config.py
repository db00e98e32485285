"""
Application configuration via pydantic-settings.

Loads values from .env file with sensible defaults for local development.
Use ``get_settings()`` to obtain the cached singleton instance.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """VoiceScribe application settings loaded from environment / .env file.

    All settings can be overridden via environment variables or a `.env` file.
    Field names map directly to env var names (case-insensitive).

    Attributes:
        database_url: Async SQLAlchemy connection string. Required.
        deepgram_api_key: Credential for the Deepgram transcription API. Required.
        uploads_dir: Content directory holding uploaded/recorded audio files.
        frontend_dist_dir: Optional static frontend bundle served with SPA fallback.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Silently ignore unrecognized env vars
    )

    # --- Application ---
    host: str = "0.0.0.0"  # Bind address for the FastAPI server
    port: int = 5000
    log_level: str = "INFO"  # Python logging level
    cors_origins: list[str] = [
        "http://localhost:8501",  # Streamlit
        "http://localhost:5173",  # Vite dev server
        "http://localhost:3000",
    ]

    # --- Storage ---
    # Empty means "not configured"; startup refuses to run without it
    database_url: str = ""
    uploads_dir: str = "uploads"  # Created on first upload if absent
    frontend_dist_dir: str = ""  # Empty = no static frontend

    # --- Deepgram STT ---
    deepgram_api_key: str = ""  # Required
    deepgram_base_url: str = "https://api.deepgram.com"
    deepgram_model: str = "nova-2"
    deepgram_smart_format: bool = True
    deepgram_timeout: float = 60.0  # Seconds, applies to the single provider call

    # --- Client ---
    api_url: str = "http://localhost:5000"  # Backend base URL used by the Streamlit UI


# Settings that must be present for the server to start, mapped to their env var names.
REQUIRED_SETTINGS = {
    "database_url": "DATABASE_URL",
    "deepgram_api_key": "DEEPGRAM_API_KEY",
}


def check_required_settings(settings: Settings) -> None:
    """Fail fast when a required setting is missing or blank.

    Raises:
        ConfigurationError: Listing every missing environment variable.
    """
    missing = [
        env_name
        for field, env_name in REQUIRED_SETTINGS.items()
        if not str(getattr(settings, field, "") or "").strip()
    ]
    if missing:
        raise ConfigurationError(missing)


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings singleton.

    Uses ``functools.lru_cache`` so the .env file is read only once.
    Subsequent calls return the same ``Settings`` instance.

    Returns:
        Settings: The application-wide configuration object.
    """
    return Settings()
