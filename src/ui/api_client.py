"""
Synchronous HTTP client for the VoiceScribe backend API.

Uses ``httpx.Client`` (sync) because Streamlit scripts run synchronously.
"""

import logging

import httpx
import streamlit as st

logger = logging.getLogger(__name__)


class APIError(Exception):
    """User-friendly API error with categorized message.

    Categories: "connection", "timeout", "http", "network", "unknown".
    Used by the UI to display appropriate error messages.
    """

    def __init__(self, message: str, category: str = "unknown") -> None:
        self.message = message
        self.category = category
        super().__init__(message)


class APIClient:
    """Thin synchronous wrapper around httpx for calling the FastAPI backend.

    All methods return parsed JSON or raise ``APIError`` with
    user-friendly messages for display in the UI.
    """

    def __init__(self, base_url: str = "http://localhost:5000") -> None:
        """Initialize the HTTP client.

        Args:
            base_url: Base URL of the VoiceScribe FastAPI backend.
        """
        self._base_url = base_url.rstrip("/")
        self._client = httpx.Client(base_url=self._base_url, timeout=30.0)

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Execute an HTTP request with user-friendly error handling.

        Args:
            method: HTTP method name ("get", "post", "delete").
            path: API endpoint path (e.g. "/api/history").
            **kwargs: Passed through to httpx (files, params, timeout, etc.).

        Returns:
            The httpx Response object with a successful status code.

        Raises:
            APIError: On connection, timeout, HTTP status, or network errors.
        """
        try:
            resp = getattr(self._client, method)(path, **kwargs)
            resp.raise_for_status()
            return resp
        except httpx.ConnectError:
            raise APIError(
                "Backend server is not running. Start it with: `python -m src.main`",
                category="connection",
            ) from None
        except httpx.TimeoutException:
            raise APIError(
                "Request timed out. The server may be overloaded.",
                category="timeout",
            ) from None
        except httpx.HTTPStatusError as exc:
            try:
                detail = exc.response.json().get("error", exc.response.text)
            except Exception:
                detail = exc.response.text or str(exc)
            raise APIError(str(detail), category="http") from None
        except httpx.HTTPError as exc:
            raise APIError(f"Network error: {exc}", category="network") from None

    # -- system --

    def hello(self) -> dict:
        return self._request("get", "/api/hello").json()

    def check_connection(self) -> tuple[bool, str]:
        """Check if the backend is reachable. Returns (ok, message)."""
        try:
            self.hello()
            return True, "Connected"
        except APIError as exc:
            return False, exc.message

    # -- upload --

    def upload_audio(self, filename: str, data: bytes, mimetype: str = "audio/wav") -> str:
        """Send an audio file to ``/api/upload`` and return the transcript."""
        resp = self._request(
            "post",
            "/api/upload",
            files={"audio": (filename, data, mimetype)},
            timeout=300.0,
        )
        return resp.json()["transcription"]

    # -- history --

    def list_history(self) -> list[dict]:
        return self._request("get", "/api/history").json()

    def delete_entry(self, entry_id: str) -> dict:
        return self._request("delete", f"/api/history/{entry_id}").json()

    # -- audio --

    def download_audio(self, file_path: str) -> bytes | None:
        """Fetch raw audio bytes for an entry. Returns None when the file is missing."""
        try:
            return self._request("get", f"/{file_path.lstrip('/')}").content
        except APIError:
            return None


@st.cache_resource
def get_api_client(base_url: str = "http://localhost:5000") -> APIClient:
    """Return a cached APIClient, keyed by base_url.

    Uses Streamlit's ``cache_resource`` to persist the client across reruns.
    When the base URL changes (e.g. user updates sidebar), a new client
    is created automatically because the cache key includes the parameter.
    """
    return APIClient(base_url=base_url)
