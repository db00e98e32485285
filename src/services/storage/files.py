"""
Content directory helpers.

Uploaded audio lives in a single flat directory. Files are named
``<epoch-ms><ext>`` and referenced from the database by a relative path
``uploads/<name>`` that doubles as the URL path under which the file is
served.
"""

import logging
import re
import shutil
import time
from pathlib import Path, PurePosixPath
from typing import BinaryIO

logger = logging.getLogger(__name__)

# Relative paths stored in the DB (and the static mount) start with this segment.
URL_PREFIX = "uploads"

_CHUNK_SIZE = 1024 * 1024

# Extensions kept on stored files; anything else is dropped.
_SAFE_EXT = re.compile(r"^\.[A-Za-z0-9]{1,10}$")


def safe_extension(original_name: str | None) -> str:
    """Lowercased extension of *original_name*, or "" if it is not plain alphanumeric."""
    ext = Path(original_name or "").suffix
    return ext.lower() if _SAFE_EXT.match(ext) else ""


class ContentStore:
    """Reads and writes audio files inside the content directory.

    Args:
        root: Directory holding the audio files. Created lazily on first save.
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def ensure_dir(self) -> Path:
        self._root.mkdir(parents=True, exist_ok=True)
        return self._root

    def save(self, source: BinaryIO, original_name: str | None) -> str:
        """Copy *source* into a freshly named file and return its relative path.

        The name is claimed with exclusive create; if another request already
        took the same millisecond the counter is bumped until a free name is
        found.
        """
        self.ensure_dir()
        ext = safe_extension(original_name)
        stamp = int(time.time() * 1000)
        while True:
            target = self._root / f"{stamp}{ext}"
            try:
                out = open(target, "xb")
            except FileExistsError:
                stamp += 1
                continue
            try:
                with out:
                    shutil.copyfileobj(source, out, _CHUNK_SIZE)
            except OSError:
                target.unlink(missing_ok=True)
                raise
            break
        logger.info("Stored upload %s (%d bytes)", target.name, target.stat().st_size)
        return f"{URL_PREFIX}/{target.name}"

    def resolve(self, relative_path: str) -> Path:
        """Map a stored relative path to an absolute path inside the content dir.

        Raises:
            ValueError: If the path escapes the content directory.
        """
        parts = PurePosixPath(relative_path.replace("\\", "/")).parts
        if parts and parts[0] == URL_PREFIX:
            parts = parts[1:]
        root = self._root.resolve()
        resolved = root.joinpath(*parts).resolve()
        if resolved == root or not resolved.is_relative_to(root):
            raise ValueError(f"Path outside content directory: {relative_path}")
        return resolved

    def delete(self, relative_path: str) -> bool:
        """Remove the file behind *relative_path*.

        Returns:
            True if a file was removed, False if it was already missing.
        """
        path = self.resolve(relative_path)
        try:
            path.unlink()
        except FileNotFoundError:
            logger.warning("Audio file already missing: %s", path)
            return False
        return True
