"""Data model for workspaces copied to the build server."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from remotepatch.util.paths import is_within, remote_folder_for


@dataclass(slots=True, frozen=True)
class WorkspaceProject:
    """
    A local workspace that must be transferred to the build server.

    Notes:
        - remote_path is relative to the remote build directory and always
          has the form '../<name>'.
        - Created once, when a patch path is first seen inside a workspace
          not known yet; immutable afterwards.
    """

    name: str
    local_path: Path
    remote_path: PurePosixPath

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("WorkspaceProject.name must be a non-empty string")
        if self.remote_path.name != self.name:
            raise ValueError(
                "WorkspaceProject.remote_path must end with the workspace name"
            )

    @classmethod
    def from_root(cls, root: Path) -> WorkspaceProject:
        """Build a project for a workspace root, placed at '../<root name>'."""
        return cls(name=root.name, local_path=root, remote_path=remote_folder_for(root.name))

    def contains(self, path: Path) -> bool:
        """Return True if path lies inside this workspace (any depth)."""
        return is_within(path, self.local_path)
