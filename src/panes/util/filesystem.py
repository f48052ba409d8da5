"""
Filesystem helpers for reading inputs and writing compiled documents.
"""

from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock

logger = logging.getLogger(__name__)


def _ensure_parent(target: Path) -> None:
    if target.parent and not target.parent.exists():
        target.parent.mkdir(parents=True, exist_ok=True)


@contextmanager
def _document_lock(target: Path):
    """Hold `<name>.lock` beside the target so concurrent builds write in turn."""
    lock_path = target.with_suffix(f"{target.suffix}.lock")
    _ensure_parent(lock_path)
    logger.debug("Waiting for lock %s", lock_path)
    with FileLock(str(lock_path)):
        yield


def _replace_atomically(target: Path, content: str, encoding: str) -> None:
    """Stage content in a hidden temp file beside the target, then rename over it."""
    _ensure_parent(target)
    fd, staged = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "w", encoding=encoding) as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(staged, target)
    finally:
        if os.path.exists(staged):
            logger.debug("Removing leftover staging file %s", staged)
            os.unlink(staged)


def read_text_file(path: Path | str, encoding: str = "utf-8") -> str:
    return Path(path).expanduser().read_text(encoding=encoding)


def write_text_file(path: Path | str, content: str, encoding: str = "utf-8", *, lock: bool = True) -> Path:
    """
    Write a document, creating parent directories as needed.

    The write is atomic and, unless `lock` is False, serialized through a lock
    file. Returns the resolved target path.

    Raises:
        OSError: If the directory, lock or file cannot be written.
    """
    target = Path(path).expanduser().resolve()
    try:
        if lock:
            with _document_lock(target):
                _replace_atomically(target, content, encoding)
        else:
            _replace_atomically(target, content, encoding)
    except OSError as exc:
        logger.debug("Failed to write %s (%s)", target, exc)
        raise
    logger.debug("Wrote %d characters to %s", len(content), target)
    return target
