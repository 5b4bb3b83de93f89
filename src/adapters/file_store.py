"""Access to the edited file on disk.

Writes are full replacements: the received content becomes the whole file.
Both operations are synchronous so that an interrupt never lands in the
middle of a write.
"""

from __future__ import annotations

from pathlib import Path

from core.errors import LocalIOError


def read_document(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise LocalIOError(f"Cannot read {path}: {exc}") from exc


def write_document(path: Path, content: str) -> int:
    """Overwrite `path` with the UTF-8 bytes of `content`; returns the byte count."""

    data = content.encode("utf-8")
    try:
        path.write_bytes(data)
    except OSError as exc:
        raise LocalIOError(f"Cannot write {path}: {exc}") from exc
    return len(data)
