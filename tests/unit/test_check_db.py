"""Tests for the database connection checker script."""

import importlib.util
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "check_db.py"


@pytest.fixture(scope="module")
def check_db():
    spec = importlib.util.spec_from_file_location("check_db", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


async def test_connects_to_sqlite(check_db, capsys):
    assert await check_db.try_connect("sqlite+aiosqlite:///:memory:", timeout=5) == 0
    assert "Connected successfully" in capsys.readouterr().out


async def test_invalid_url(check_db, capsys):
    assert await check_db.try_connect("not a url", timeout=5) == 1
    assert "Invalid database URL" in capsys.readouterr().out


async def test_unreachable_database(check_db, tmp_path, capsys):
    url = f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'db.sqlite'}"
    assert await check_db.try_connect(url, timeout=5) == 1
    assert "Connection failed" in capsys.readouterr().out


def test_password_is_redacted(check_db):
    redacted = check_db._redacted("postgresql+asyncpg://user:hunter2@db/voicescribe")
    assert "hunter2" not in redacted


def test_write_env_replaces_existing_url(check_db, tmp_path):
    env = tmp_path / ".env"
    env.write_text("DEEPGRAM_API_KEY=k\nDATABASE_URL=old\nPORT=5000\n")

    check_db.write_env(env, "sqlite+aiosqlite:///new.db")

    lines = env.read_text().splitlines()
    assert lines.count("DATABASE_URL=sqlite+aiosqlite:///new.db") == 1
    assert "DATABASE_URL=old" not in lines
    assert "DEEPGRAM_API_KEY=k" in lines


def test_main_writes_env_after_successful_connect(check_db, tmp_path, monkeypatch):
    env = tmp_path / ".env"
    url = f"sqlite+aiosqlite:///{tmp_path / 'ok.db'}"
    monkeypatch.setattr("sys.argv", ["check_db.py", "--url", url, "--write-env", str(env)])

    assert check_db.main() == 0
    assert env.read_text() == f"DATABASE_URL={url}\n"


def test_main_does_not_write_env_on_failure(check_db, tmp_path, monkeypatch):
    env = tmp_path / ".env"
    url = f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'db.sqlite'}"
    monkeypatch.setattr("sys.argv", ["check_db.py", "--url", url, "--write-env", str(env)])

    assert check_db.main() == 1
    assert not env.exists()
