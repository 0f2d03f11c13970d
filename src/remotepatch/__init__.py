"""remotepatch public API."""

from __future__ import annotations

from remotepatch.config import RemoteBuildConfig
from remotepatch.errors import (
    ConflictError,
    InvalidArgumentError,
    ManifestParseError,
    ManifestReadError,
    NetworkError,
    RemotePatchError,
    Stage,
    TransferError,
    WorkspaceNotFoundError,
    describe_error,
)
from remotepatch.locator import CargoWorkspaceLocator
from remotepatch.manager import RemotePatchManager
from remotepatch.manifest import PatchPathField, PatchPlanner, extract_patch_fields, plan_patches
from remotepatch.models import OperationResult, TransferResult, WorkspaceProject
from remotepatch.plan import TransferKind, TransferOperation, TransferPlan
from remotepatch.transfer import RsyncCopier

__all__ = [
    # High-level
    "RemotePatchManager",
    "RemoteBuildConfig",
    # Collaborators
    "CargoWorkspaceLocator",
    "RsyncCopier",
    # Manifest
    "PatchPathField",
    "PatchPlanner",
    "extract_patch_fields",
    "plan_patches",
    # Plan / Models
    "TransferKind",
    "TransferOperation",
    "TransferPlan",
    "WorkspaceProject",
    "OperationResult",
    "TransferResult",
    # Errors
    "Stage",
    "RemotePatchError",
    "InvalidArgumentError",
    "ManifestReadError",
    "ManifestParseError",
    "WorkspaceNotFoundError",
    "ConflictError",
    "TransferError",
    "NetworkError",
    "describe_error",
]
