"""PatchPlanner: deduplicate patched workspaces and rewrite patch paths (no transfers)."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Optional

from remotepatch.errors import WorkspaceNotFoundError
from remotepatch.models import WorkspaceProject
from remotepatch.util.paths import (
    StrPath,
    relative_parts,
    resolve_patch_path,
    to_remote_path,
)

from .patch_fields import PatchPathField
from .validators import validate_no_conflict, validate_root_contains

LOGGER = logging.getLogger(__name__)

# Returns the workspace root owning a path; raises WorkspaceNotFoundError.
WorkspaceLocator = Callable[[Path], Path]


class PatchPlanner:
    """
    Map every patch path onto the remote layout, one workspace at a time.

    Keeps an ordered list of known workspaces. A path inside a known
    workspace reuses it; otherwise the locator is asked for the root and a
    new WorkspaceProject is appended. The first path seen in a workspace
    therefore decides its entry, and each workspace is copied once.
    """

    def __init__(
        self,
        locator: WorkspaceLocator,
        *,
        base_dir: Optional[StrPath] = None,
    ) -> None:
        self._locator = locator
        self._base_dir = base_dir
        self._workspaces: list[WorkspaceProject] = []

    @property
    def workspaces(self) -> list[WorkspaceProject]:
        """Known workspaces in first-discovery order."""
        return list(self._workspaces)

    def plan(self, fields: Iterable[PatchPathField]) -> list[WorkspaceProject]:
        """Rewrite all fields in place and return the workspaces to copy."""
        for patch_field in fields:
            self.rewrite(patch_field)
        return self.workspaces

    def rewrite(self, patch_field: PatchPathField) -> str:
        """Rewrite one field to '../<workspace>/<sub/path>' and return the new value."""
        path = resolve_patch_path(patch_field.value, self._base_dir)

        project = self.find_workspace(path)
        if project is None:
            project = self._add_workspace(path)

        new_value = to_remote_path(
            project.remote_path,
            relative_parts(path, project.local_path),
        )
        LOGGER.debug(
            "Rewriting patch %s.%s: %s -> %s",
            patch_field.source,
            patch_field.crate,
            patch_field.value,
            new_value,
        )
        patch_field.replace(new_value)
        return new_value

    def find_workspace(self, path: Path) -> Optional[WorkspaceProject]:
        for project in self._workspaces:
            if project.contains(path):
                return project
        return None

    # ----------------------------
    # Internals
    # ----------------------------
    def _add_workspace(self, path: Path) -> WorkspaceProject:
        root = self._locate(path)
        validate_root_contains(root, path)

        project = WorkspaceProject.from_root(root)
        validate_no_conflict(self._workspaces, project)

        LOGGER.debug(
            "Found referenced workspace '%s', will copy to '%s'",
            project.local_path,
            project.remote_path,
        )
        self._workspaces.append(project)
        return project

    def _locate(self, path: Path) -> Path:
        try:
            root = self._locator(path)
        except WorkspaceNotFoundError as exc:
            exc.details.setdefault("path", str(path))
            raise
        return Path(os.path.normpath(root))


def plan_patches(
    fields: Iterable[PatchPathField],
    locator: WorkspaceLocator,
    *,
    base_dir: Optional[StrPath] = None,
) -> list[WorkspaceProject]:
    """Rewrite fields in place; return the distinct workspaces in discovery order."""
    return PatchPlanner(locator, base_dir=base_dir).plan(fields)
