"""
Filesystem helpers for writing finished documents.
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
def file_lock(path: Path | str):
    """Hold a lock file next to the target while it is rewritten."""
    target = Path(path).expanduser().resolve()
    lock_path = target.with_suffix(f"{target.suffix}.lock")
    _ensure_parent(lock_path)
    with FileLock(str(lock_path)):
        yield


def _atomic_write_text(target: Path, content: str, encoding: str) -> None:
    """Stage the content in a temp file beside the target, then rename over it."""
    _ensure_parent(target)
    fd, tmp_path = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "w", encoding=encoding) as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, target)
    finally:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass


def write_text_file(path: Path | str, content: str, encoding: str = "utf-8") -> Path:
    """
    Write a document so readers never observe a partially written file.
    """
    target = Path(path).expanduser().resolve()
    with file_lock(target):
        _atomic_write_text(target, content, encoding=encoding)
    logger.debug("Wrote %d characters to %s", len(content), target)
    return target
