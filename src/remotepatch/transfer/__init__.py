"""Transfer exports for remotepatch."""

from __future__ import annotations

from .rsync import RsyncCopier, build_copy_command, build_sync_command

__all__ = ["RsyncCopier", "build_sync_command", "build_copy_command"]
