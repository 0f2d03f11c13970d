"""Transfer operation kinds for remotepatch."""

from __future__ import annotations

from enum import Enum

from remotepatch.errors import Stage


class TransferKind(str, Enum):
    """Supported transfer operations."""

    SYNC_WORKSPACE = "SYNC_WORKSPACE"
    COPY_MANIFEST = "COPY_MANIFEST"

    @property
    def stage(self) -> Stage:
        if self is TransferKind.COPY_MANIFEST:
            return Stage.TRANSFER_MANIFEST
        return Stage.TRANSFER_WORKSPACE
