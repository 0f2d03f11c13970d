"""TransferPlan model."""

from __future__ import annotations

from dataclasses import dataclass, field

from remotepatch.models import WorkspaceProject

from .operation import TransferOperation


@dataclass(slots=True)
class TransferPlan:
    """A plan that can be reviewed (dry run) and then applied."""

    plan_id: str
    manifest_text: str
    workspaces: list[WorkspaceProject] = field(default_factory=list)
    operations: list[TransferOperation] = field(default_factory=list)
    apply_order: list[str] = field(default_factory=list)
    has_patches: bool = True
