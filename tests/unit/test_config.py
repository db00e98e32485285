"""Tests for settings validation and the fail-fast server entry point."""

from unittest.mock import patch

import pytest

from src.core.config import Settings, check_required_settings
from src.core.exceptions import ConfigurationError
from src import main as server_main


def _settings(**overrides) -> Settings:
    values = {"database_url": "sqlite+aiosqlite:///x.db", "deepgram_api_key": "k"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestDefaults:
    def test_port_and_model(self, monkeypatch):
        monkeypatch.delenv("PORT", raising=False)
        monkeypatch.delenv("DEEPGRAM_MODEL", raising=False)
        s = _settings()
        assert s.port == 5000
        assert s.deepgram_model == "nova-2"
        assert s.uploads_dir == "uploads"

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///env.db")
        s = Settings(_env_file=None)
        assert s.port == 8080
        assert s.database_url == "sqlite+aiosqlite:///env.db"


class TestCheckRequiredSettings:
    def test_all_present(self):
        check_required_settings(_settings())

    def test_missing_database_url(self):
        with pytest.raises(ConfigurationError) as exc_info:
            check_required_settings(_settings(database_url=""))
        assert exc_info.value.missing == ["DATABASE_URL"]
        assert "DATABASE_URL" in exc_info.value.detail

    def test_blank_counts_as_missing(self):
        with pytest.raises(ConfigurationError) as exc_info:
            check_required_settings(_settings(deepgram_api_key="   "))
        assert exc_info.value.missing == ["DEEPGRAM_API_KEY"]


class TestMain:
    def test_refuses_to_start_without_settings(self):
        with (
            patch.object(server_main, "get_settings", return_value=_settings(database_url="")),
            patch.object(server_main, "configure_logging"),
            patch.object(server_main.uvicorn, "run") as run,
        ):
            assert server_main.main() == 1
        run.assert_not_called()

    def test_starts_uvicorn(self):
        with (
            patch.object(server_main, "get_settings", return_value=_settings(port=5050)),
            patch.object(server_main, "configure_logging"),
            patch.object(server_main.uvicorn, "run") as run,
        ):
            assert server_main.main() == 0
        run.assert_called_once()
        assert run.call_args.kwargs["port"] == 5050
