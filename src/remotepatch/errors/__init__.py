"""Public error exports for remotepatch."""

from __future__ import annotations

from .exceptions import (
    ConflictError,
    InvalidArgumentError,
    ManifestParseError,
    ManifestReadError,
    NetworkError,
    ProcessErrorInfo,
    RemotePatchError,
    Stage,
    TransferError,
    WorkspaceNotFoundError,
    describe_error,
    map_rsync_exit,
)

__all__ = [
    "Stage",
    "RemotePatchError",
    "InvalidArgumentError",
    "ManifestReadError",
    "ManifestParseError",
    "WorkspaceNotFoundError",
    "ConflictError",
    "TransferError",
    "NetworkError",
    "ProcessErrorInfo",
    "describe_error",
    "map_rsync_exit",
]
