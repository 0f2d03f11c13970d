"""rsync-based copier for workspaces and the manifest."""

from __future__ import annotations

import logging
import os
import posixpath
import shlex
import subprocess

from remotepatch.config import RemoteBuildConfig
from remotepatch.errors import (
    ProcessErrorInfo,
    Stage,
    TransferError,
    map_rsync_exit,
)
from remotepatch.util.paths import StrPath, join_remote

from .options import COMPRESS_FLAG, COPY_FLAGS, SYNC_FLAGS

LOGGER = logging.getLogger(__name__)


class RsyncCopier:
    """
    Copy to the build server with rsync (one blocking process per call).

    Remote paths given to this class are relative to config.build_path.
    rsync inherits stdin/stdout/stderr so progress and ssh prompts reach
    the user. Failures are raised; nothing is retried.
    """

    def __init__(self, config: RemoteBuildConfig) -> None:
        self._config = config

    @property
    def config(self) -> RemoteBuildConfig:
        return self._config

    def sync_directory(self, local_dir: StrPath, remote_dir: StrPath) -> str:
        """Mirror the contents of local_dir to remote_dir. Returns the rsync destination."""
        args = build_sync_command(self._config, local_dir, remote_dir)
        LOGGER.debug("Copying workspace from %s to %s.", args[-2], args[-1])
        self._run(args, Stage.TRANSFER_WORKSPACE)
        return args[-1]

    def copy_file(self, local_file: StrPath, remote_file: StrPath) -> str:
        """Copy one file, overwriting remote_file. Returns the rsync destination."""
        args = build_copy_command(self._config, local_file, remote_file)
        LOGGER.debug("Transferring %s to %s.", args[-2], args[-1])
        self._run(args, Stage.TRANSFER_MANIFEST)
        return args[-1]

    def _run(self, args: list[str], stage: Stage) -> None:
        try:
            completed = subprocess.run(args, check=False)
        except OSError as exc:
            raise TransferError(
                f"Failed to start {args[0]}",
                details={"command": args},
                cause=exc,
                stage=stage,
            ) from exc

        if completed.returncode != 0:
            raise map_rsync_exit(
                ProcessErrorInfo(returncode=completed.returncode, command=args),
                stage=stage,
            )


def build_sync_command(
    config: RemoteBuildConfig,
    local_dir: StrPath,
    remote_dir: StrPath,
) -> list[str]:
    """
    Build the rsync command mirroring local_dir into remote_dir.

    The trailing slash on the source copies its contents, not the folder
    itself. `--rsync-path` creates the remote parent folder first.
    """
    target = join_remote(config.build_path, remote_dir)
    parent = posixpath.dirname(target) or "."

    args = [config.rsync, *SYNC_FLAGS]
    args.extend(_common_flags(config))
    for pattern in config.excludes:
        args.extend(["--exclude", pattern])
    args.extend(["--rsync-path", f"mkdir -p {_shell_path(parent)} && rsync"])
    args.append(os.path.join(os.fspath(local_dir), ""))
    args.append(f"{config.build_server}:{target}")
    return args


def build_copy_command(
    config: RemoteBuildConfig,
    local_file: StrPath,
    remote_file: StrPath,
) -> list[str]:
    """
    Build the rsync command copying a single file into the build directory.

    `--rsync-path` creates the folder holding the file first.
    """
    target = join_remote(config.build_path, remote_file)
    parent = posixpath.dirname(target) or "."

    args = [config.rsync, *COPY_FLAGS]
    args.extend(_common_flags(config))
    args.extend(["--rsync-path", f"mkdir -p {_shell_path(parent)} && rsync"])
    args.append(os.fspath(local_file))
    args.append(f"{config.build_server}:{target}")
    return args


def _common_flags(config: RemoteBuildConfig) -> list[str]:
    flags: list[str] = []
    if config.compress:
        flags.append(COMPRESS_FLAG)
    if config.progress_flag:
        flags.append(config.progress_flag)
    return flags


def _shell_path(path: str) -> str:
    # Quote for the remote shell but leave a leading '~' expandable.
    if path == "~":
        return path
    if path.startswith("~/"):
        return "~/" + shlex.quote(path[2:])
    return shlex.quote(path)
