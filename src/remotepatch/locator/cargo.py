"""Workspace lookup through `cargo locate-project`."""

from __future__ import annotations

import json
import logging
import os
import subprocess
from pathlib import Path
from typing import Mapping, Optional

from remotepatch.errors import WorkspaceNotFoundError

LOGGER = logging.getLogger(__name__)


class CargoWorkspaceLocator:
    """
    Locate the workspace root owning a crate directory.

    Runs `cargo locate-project --workspace` on `<path>/Cargo.toml`. The cargo
    binary comes from the CARGO environment variable (set by cargo for
    subcommands), falling back to `cargo` on PATH. Read-only query.
    """

    def __init__(self, cargo: Optional[str] = None, *, environ: Optional[Mapping[str, str]] = None) -> None:
        env = os.environ if environ is None else environ
        self._cargo = cargo or env.get("CARGO") or "cargo"

    @property
    def cargo(self) -> str:
        return self._cargo

    def __call__(self, path: Path) -> Path:
        return self.locate(path)

    def locate(self, path: Path) -> Path:
        """
        Return the workspace root directory of the crate at path.

        Raises:
            WorkspaceNotFoundError: cargo missing or failing, or output without a root.
        """
        manifest = Path(path) / "Cargo.toml"
        LOGGER.debug("Checking workspace root of path %s", path)
        args = [
            self._cargo,
            "locate-project",
            "--workspace",
            "--message-format",
            "json",
            "--manifest-path",
            str(manifest),
        ]

        try:
            out = subprocess.run(args, capture_output=True, text=True, check=False)
        except OSError as exc:
            raise WorkspaceNotFoundError(
                f"Failed to run {self._cargo}",
                details={"path": str(path), "command": args},
                cause=exc,
            ) from exc

        if out.returncode != 0:
            raise WorkspaceNotFoundError(
                f"Cannot determine workspace of {path}",
                details={
                    "path": str(path),
                    "returncode": out.returncode,
                    "stderr": out.stderr.strip(),
                },
            )

        return _parse_workspace_root(out.stdout, path)


def _parse_workspace_root(stdout: str, path: Path) -> Path:
    try:
        payload = json.loads(stdout)
    except ValueError as exc:
        raise WorkspaceNotFoundError(
            f"Unexpected cargo locate-project output for {path}",
            details={"path": str(path), "stdout": stdout},
            cause=exc,
        ) from exc

    root = payload.get("root") if isinstance(payload, dict) else None
    if not isinstance(root, str) or not root:
        raise WorkspaceNotFoundError(
            f"cargo locate-project reported no root for {path}",
            details={"path": str(path), "stdout": stdout},
        )

    # root is the workspace Cargo.toml; the workspace is its folder.
    return Path(root).parent
