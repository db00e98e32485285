"""Unit tests for the Streamlit-side APIClient.

Validates that requests hit the right endpoints with the right payloads
and that transport failures become categorized ``APIError``s.
"""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from src.ui.api_client import APIClient, APIError


@pytest.fixture
def client():
    """Create an APIClient with a mocked httpx.Client."""
    with patch("src.ui.api_client.httpx.Client") as mock_cls:
        mock_http = MagicMock()
        mock_cls.return_value = mock_http
        api = APIClient(base_url="http://test:5000/")
        api._mock_http = mock_http  # expose for assertions
        yield api


def _response(payload=None, content=b""):
    resp = MagicMock()
    resp.json.return_value = payload
    resp.content = content
    return resp


def _status_error(status: int, body: dict | None = None, text: str = "") -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "http://test:5000/api/history")
    response = httpx.Response(status, json=body, request=request) if body else httpx.Response(
        status, text=text, request=request
    )
    return httpx.HTTPStatusError("error", request=request, response=response)


class TestRequests:
    def test_base_url_trailing_slash_stripped(self):
        with patch("src.ui.api_client.httpx.Client") as mock_cls:
            APIClient(base_url="http://host:5000/")
        assert mock_cls.call_args.kwargs["base_url"] == "http://host:5000"

    def test_upload_audio(self, client):
        client._mock_http.post.return_value = _response({"transcription": "hello"})

        text = client.upload_audio("recording.wav", b"RIFF")

        client._mock_http.post.assert_called_once_with(
            "/api/upload",
            files={"audio": ("recording.wav", b"RIFF", "audio/wav")},
            timeout=300.0,
        )
        assert text == "hello"

    def test_list_history(self, client):
        client._mock_http.get.return_value = _response([{"_id": "a"}])
        assert client.list_history() == [{"_id": "a"}]
        client._mock_http.get.assert_called_once_with("/api/history")

    def test_delete_entry(self, client):
        client._mock_http.delete.return_value = _response({"message": "Deleted successfully"})
        assert client.delete_entry("abc")["message"] == "Deleted successfully"
        client._mock_http.delete.assert_called_once_with("/api/history/abc")

    def test_download_audio(self, client):
        client._mock_http.get.return_value = _response(content=b"RIFF")
        assert client.download_audio("uploads/1.wav") == b"RIFF"
        client._mock_http.get.assert_called_once_with("/uploads/1.wav")


class TestErrors:
    def test_connection_error(self, client):
        client._mock_http.get.side_effect = httpx.ConnectError("refused")
        with pytest.raises(APIError) as exc_info:
            client.list_history()
        assert exc_info.value.category == "connection"

    def test_timeout(self, client):
        client._mock_http.post.side_effect = httpx.ReadTimeout("slow")
        with pytest.raises(APIError) as exc_info:
            client.upload_audio("a.wav", b"")
        assert exc_info.value.category == "timeout"

    def test_http_error_uses_envelope_message(self, client):
        resp = _response()
        resp.raise_for_status.side_effect = _status_error(
            404, {"error": "Transcription not found", "code": "ENTRY_NOT_FOUND"}
        )
        client._mock_http.delete.return_value = resp

        with pytest.raises(APIError) as exc_info:
            client.delete_entry("x")
        assert exc_info.value.category == "http"
        assert exc_info.value.message == "Transcription not found"

    def test_http_error_plain_text(self, client):
        resp = _response()
        resp.raise_for_status.side_effect = _status_error(502, text="Bad Gateway")
        client._mock_http.get.return_value = resp

        with pytest.raises(APIError, match="Bad Gateway"):
            client.list_history()

    def test_download_missing_returns_none(self, client):
        resp = _response()
        resp.raise_for_status.side_effect = _status_error(404, text="Not Found")
        client._mock_http.get.return_value = resp
        assert client.download_audio("uploads/gone.wav") is None

    def test_check_connection(self, client):
        client._mock_http.get.side_effect = httpx.ConnectError("refused")
        ok, message = client.check_connection()
        assert ok is False
        assert "python -m src.main" in message
