"""Public model exports for remotepatch."""

from __future__ import annotations

from .results import OperationResult, OperationStatus, TransferResult, TransferStatus
from .workspace import WorkspaceProject

__all__ = [
    "WorkspaceProject",
    "OperationStatus",
    "TransferStatus",
    "OperationResult",
    "TransferResult",
]
