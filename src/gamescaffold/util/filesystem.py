"""
Filesystem helpers shared by the extractor, the seed emitter and the CLI.
"""

from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock

logger = logging.getLogger(__name__)

LOCK_FILENAME = ".gamescaffold.lock"


def ensure_directory(path: Path | str) -> Path:
    """
    Ensure a directory exists, returning the resolved Path.
    """
    resolved = Path(path).expanduser().resolve()
    resolved.mkdir(parents=True, exist_ok=True)
    return resolved


def _ensure_parent(target: Path) -> None:
    """Ensure the parent directory for target exists."""
    if target.parent and not target.parent.exists():
        target.parent.mkdir(parents=True, exist_ok=True)


def is_within(path: Path | str, base: Path | str) -> bool:
    """Return True if path resolves strictly beneath base."""
    target = Path(path).resolve()
    root = Path(base).resolve()
    return target != root and target.is_relative_to(root)


def lock_path_for(root: Path | str) -> Path:
    """
    Lock file used to serialize scaffolds into the same destination root.

    The lock sits directly in the root, next to the project directories, so
    only the root itself has to be writable.
    """
    return Path(root).expanduser().resolve() / LOCK_FILENAME


@contextmanager
def file_lock(path: Path | str):
    """Context manager holding an advisory filesystem lock for path."""
    lock_path = lock_path_for(path)
    _ensure_parent(lock_path)
    logger.debug("Acquiring lock %s", lock_path)
    with FileLock(str(lock_path)):
        yield


def _atomic_write_bytes(target: Path, data: bytes) -> None:
    """Write bytes atomically by staging a temp file and renaming."""
    _ensure_parent(target)
    fd, tmp_path = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, target)
    finally:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass


def write_bytes_file(path: Path | str, data: bytes) -> Path:
    """
    Write bytes to a file, creating parent directories as needed.

    Existing files are replaced in one rename, so readers never observe a
    partially written file.
    """
    target = Path(path).expanduser()
    _atomic_write_bytes(target, data)
    return target
