"""rsync option sets used by remotepatch."""

from __future__ import annotations

# Archive, quiet, mirror (delete remote files removed locally).
SYNC_FLAGS: tuple[str, ...] = ("-a", "-q", "--delete")

COPY_FLAGS: tuple[str, ...] = ("-v",)

COMPRESS_FLAG: str = "--compress"
