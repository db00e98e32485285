#!/usr/bin/env python3
"""
VoiceScribe database connection checker

Attempts a quick connection to the record store and reports the outcome.

Usage:
    python scripts/check_db.py                 # use DATABASE_URL from env / .env
    python scripts/check_db.py --url URL       # test an explicit URL
    python scripts/check_db.py --timeout 10    # connect timeout in seconds
    python scripts/check_db.py --url URL --write-env   # on success, save URL to .env
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Allow ``python scripts/check_db.py`` from the project root.
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy.engine import make_url  # noqa: E402
from sqlalchemy.exc import ArgumentError, SQLAlchemyError  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402

from src.core.config import get_settings  # noqa: E402
from src.services.storage.database import ping  # noqa: E402


def _redacted(url: str) -> str:
    try:
        return make_url(url).render_as_string(hide_password=True)
    except ArgumentError:
        return url


async def try_connect(url: str, timeout: float) -> int:
    """Connect once and run ``SELECT 1``. Returns a process exit code."""
    print(f"\nAttempting to connect to:\n  {_redacted(url)}\n")
    try:
        engine = create_async_engine(url)
    except (ArgumentError, ImportError) as exc:
        print(f"Invalid database URL: {exc}")
        return 1

    try:
        await asyncio.wait_for(ping(engine), timeout=timeout)
    except TimeoutError:
        print(f"Connection timed out after {timeout:.0f}s")
        return 1
    except (SQLAlchemyError, OSError) as exc:
        print("Connection failed:")
        print(f"  type:    {type(exc).__name__}")
        print(f"  message: {exc}")
        return 1
    finally:
        await engine.dispose()

    print("Connected successfully!")
    return 0


def write_env(env_path: Path, url: str) -> None:
    """Set ``DATABASE_URL`` in *env_path*, replacing any existing assignment."""
    lines = env_path.read_text(encoding="utf-8").splitlines() if env_path.exists() else []
    lines = [line for line in lines if not line.startswith("DATABASE_URL=")]
    lines.append(f"DATABASE_URL={url}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def main() -> int:
    parser = argparse.ArgumentParser(description="Test the VoiceScribe database connection")
    parser.add_argument("--url", help="Database URL (defaults to DATABASE_URL)")
    parser.add_argument(
        "--timeout", type=float, default=5.0, help="Connect timeout in seconds (default: 5)"
    )
    parser.add_argument(
        "--write-env",
        nargs="?",
        const=".env",
        metavar="PATH",
        help="After a successful connect, write the URL into PATH as DATABASE_URL (default: .env)",
    )
    args = parser.parse_args()

    url = args.url or get_settings().database_url
    if not url:
        print("No DATABASE_URL found in the environment or .env. Pass one with --url.")
        return 2

    code = asyncio.run(try_connect(url, args.timeout))
    if code == 0 and args.write_env:
        write_env(Path(args.write_env), url)
        print(f"Wrote DATABASE_URL to {args.write_env}")
    return code


if __name__ == "__main__":
    sys.exit(main())
