"""Result models for apply_plan/handle_patches."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

from .workspace import WorkspaceProject

OperationStatus = Literal["success"]
TransferStatus = Literal["success", "skipped"]


@dataclass(slots=True)
class OperationResult:
    """Result for a single completed TransferOperation."""

    op_id: str
    seq: int
    kind: str
    status: OperationStatus
    destination: Optional[str] = None


@dataclass(slots=True)
class TransferResult:
    """
    Aggregate result of a run.

    Failures are raised, not returned: status is "success" when every
    operation completed and "skipped" when the manifest has no patches.
    """

    status: TransferStatus
    results: list[OperationResult] = field(default_factory=list)
    workspaces: list[WorkspaceProject] = field(default_factory=list)
    summary: dict[str, int] = field(default_factory=dict)
