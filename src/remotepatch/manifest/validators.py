"""Placement checks for workspaces discovered while planning."""

from __future__ import annotations

from pathlib import Path

from remotepatch.errors import ConflictError, WorkspaceNotFoundError
from remotepatch.models import WorkspaceProject
from remotepatch.util.paths import is_within


def validate_root_contains(root: Path, path: Path) -> None:
    if not root.name:
        raise WorkspaceNotFoundError(
            f"Workspace root of {path} has no folder name: {root}",
            details={"path": str(path), "root": str(root)},
        )
    if not is_within(path, root):
        raise WorkspaceNotFoundError(
            f"Located workspace {root} does not contain {path}",
            details={"path": str(path), "root": str(root)},
        )


def validate_no_conflict(known: list[WorkspaceProject], candidate: WorkspaceProject) -> None:
    """
    Reject a new workspace that cannot be placed next to the known ones.

    Remote folders are '../<name>', so two roots with the same base name
    would overwrite each other, and a root enclosing a known workspace
    would copy it twice.
    """
    for project in known:
        if project.name == candidate.name:
            raise ConflictError(
                f"Workspaces {project.local_path} and {candidate.local_path} "
                f"would both be copied to {candidate.remote_path}",
                details={
                    "remote_path": str(candidate.remote_path),
                    "local_paths": [str(project.local_path), str(candidate.local_path)],
                },
            )
        if is_within(project.local_path, candidate.local_path):
            raise ConflictError(
                f"Workspace {candidate.local_path} contains already planned "
                f"workspace {project.local_path}",
                details={
                    "outer": str(candidate.local_path),
                    "inner": str(project.local_path),
                },
            )
